"""Text preprocessing for content sent to YouTrack."""

import re

# C0 controls except tab and newline, plus DEL
CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b-\x1f\x7f]")
LEADING_H1 = re.compile(r"^#\s+\S")


def sanitize_text(text: str | None) -> str:
    """Normalize user supplied markdown before it is written to YouTrack.

    Line endings are unified to ``\\n``, control characters are dropped and
    trailing whitespace is removed from every line. Indentation is kept so
    code blocks survive.

    Args:
        text: Raw text, possibly None

    Returns:
        Sanitized text, or an empty string for empty input
    """
    if not text:
        return ""
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    normalized = CONTROL_CHARS.sub("", normalized)
    lines = [line.rstrip() for line in normalized.split("\n")]
    return "\n".join(lines).strip("\n")


def sanitize_description(text: str | None) -> str:
    return sanitize_text(text)


def sanitize_comment(text: str | None) -> str:
    return sanitize_text(text)


def starts_with_title_heading(content: str | None) -> bool:
    """Check whether article content opens with a level-one heading.

    YouTrack renders the article title as the heading, so a leading ``# Title``
    shows up twice.
    """
    for line in (content or "").splitlines():
        if line.strip():
            return bool(LEADING_H1.match(line.lstrip()))
    return False

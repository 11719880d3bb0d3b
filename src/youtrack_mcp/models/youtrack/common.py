"""
Common YouTrack entity models.
"""

import logging
from typing import Any

from ...utils.date import parse_date
from ..base import EMPTY_STRING, UNKNOWN, ApiModel

logger = logging.getLogger(__name__)


class YouTrackUser(ApiModel):
    """
    Model representing a YouTrack user.
    """

    id: str = EMPTY_STRING
    login: str = EMPTY_STRING
    full_name: str = UNKNOWN
    email: str | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "YouTrackUser":
        if not data or not isinstance(data, dict):
            return cls()
        return cls(
            id=str(data.get("id", EMPTY_STRING)),
            login=data.get("login") or EMPTY_STRING,
            full_name=data.get("fullName") or data.get("name") or data.get("login") or UNKNOWN,
            email=data.get("email"),
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "login": self.login,
            "name": self.full_name,
        }
        if self.email:
            result["email"] = self.email
        return result


def value_to_text(value: Any) -> Any:
    """
    Flatten a custom field value to something readable.

    YouTrack field values come as enum/state bundles (``{"name": ...}``),
    users (``{"login", "fullName"}``), periods (``{"presentation"}``), lists
    of those, or plain scalars.
    """
    if value is None:
        return None
    if isinstance(value, list):
        return [value_to_text(item) for item in value]
    if isinstance(value, dict):
        for key in ("presentation", "name", "fullName", "login", "text", "idReadable"):
            if value.get(key) is not None:
                return value[key]
        if "minutes" in value:
            return value["minutes"]
        return None
    return value


def format_timestamp(value: Any) -> str:
    """Render epoch milliseconds as ``YYYY-MM-DD HH:MM`` (UTC)."""
    return parse_date(value, "%Y-%m-%d %H:%M") if value else EMPTY_STRING

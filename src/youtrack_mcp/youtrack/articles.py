"""Module for YouTrack knowledge base operations."""

import logging
from typing import Any

from ..exceptions import ValidationError
from ..models.youtrack import Article
from ..preprocessing import sanitize_text, starts_with_title_heading
from .constants import ARTICLE_DETAIL_FIELDS, ARTICLE_FIELDS
from .projects import ProjectsMixin

logger = logging.getLogger("youtrack-mcp.youtrack")

# Guards against cycles in a corrupt hierarchy
MAX_HIERARCHY_DEPTH = 20


def check_article_content(content: str | None) -> str:
    """
    Sanitize article content and reject a duplicated title heading.

    Raises:
        ValidationError: If the content opens with a level-one heading
    """
    if starts_with_title_heading(content):
        raise ValidationError(
            "content",
            "Article content must not start with a '# ' heading; the title is "
            "already rendered as the heading. Start with the body text or a '## ' section.",
        )
    return sanitize_text(content)


class ArticlesMixin(ProjectsMixin):
    """Mixin for YouTrack knowledge base operations."""

    def list_articles(self, project_id: str, limit: int = 100) -> list[Article]:
        articles = self.get(
            f"admin/projects/{project_id}/articles",
            params={"fields": ARTICLE_FIELDS, "$top": limit},
        )
        return Article.from_api_list(articles)

    def get_article(self, article_id: str) -> Article:
        article = self.get(f"articles/{article_id}", params={"fields": ARTICLE_DETAIL_FIELDS})
        return Article.from_api_response(article or {})

    def create_article(
        self,
        project_id: str,
        title: str,
        content: str,
        summary: str | None = None,
        tags: list[str] | None = None,
    ) -> Article:
        """
        Create an article in a project's knowledge base.

        Raises:
            ValidationError: If the content repeats the title as a heading
        """
        payload: dict[str, Any] = {
            "project": {"id": self.resolve_internal_project_id(project_id)},
            "summary": title,
            "content": check_article_content(content),
            "usesMarkdown": True,
        }
        if summary:
            payload["description"] = summary
        if tags:
            payload["tags"] = [{"name": tag} for tag in tags]
        article = self.post("articles", json=payload, params={"fields": ARTICLE_DETAIL_FIELDS})
        logger.info(f"Created article '{title}' in project {project_id}")
        return Article.from_api_response(article or {})

    def update_article(
        self,
        article_id: str,
        title: str | None = None,
        content: str | None = None,
        summary: str | None = None,
        tags: list[str] | None = None,
    ) -> Article:
        payload: dict[str, Any] = {}
        if title:
            payload["summary"] = title
        if content is not None:
            payload["content"] = check_article_content(content)
        if summary is not None:
            payload["description"] = summary
        if tags is not None:
            payload["tags"] = [{"name": tag} for tag in tags]
        article = self.post(
            f"articles/{article_id}", json=payload, params={"fields": ARTICLE_DETAIL_FIELDS}
        )
        return Article.from_api_response(article or {})

    def delete_article(self, article_id: str) -> None:
        self.delete(f"articles/{article_id}")

    def search_articles(
        self, search_term: str, project_id: str | None = None, limit: int = 50
    ) -> list[Article]:
        """
        Full-text search over articles.

        Args:
            search_term: Text to look for
            project_id: Restrict results to one project
            limit: Maximum number of articles
        """
        query = f"project: {project_id} {search_term}" if project_id else search_term
        articles = self.get(
            "articles", params={"query": query, "fields": ARTICLE_FIELDS, "$top": limit}
        )
        return Article.from_api_list(articles)

    def link_sub_article(self, parent_article_id: str, child_article_id: str) -> Article:
        """Make one article a child of another; returns the updated parent."""
        child = self.get(f"articles/{child_article_id}", params={"fields": "id"}) or {}
        self.post(
            f"articles/{parent_article_id}/childArticles",
            json={"id": child.get("id") or child_article_id},
        )
        return self.get_article(parent_article_id)

    def unlink_parent(self, article_id: str) -> Article:
        article = self.post(
            f"articles/{article_id}",
            json={"parentArticle": None},
            params={"fields": ARTICLE_FIELDS},
        )
        return Article.from_api_response(article or {})

    def get_article_hierarchy(self, article_id: str) -> dict[str, Any]:
        """
        Describe where an article sits: its ancestors, root first, and its
        direct children.
        """
        article = self.get_article(article_id)
        ancestors: list[dict[str, Any]] = []
        parent_id = article.parent_id
        seen = {article.id_readable or article.id}
        while parent_id and parent_id not in seen and len(ancestors) < MAX_HIERARCHY_DEPTH:
            seen.add(parent_id)
            parent = Article.from_api_response(
                self.get(f"articles/{parent_id}", params={"fields": ARTICLE_FIELDS}) or {}
            )
            ancestors.insert(0, {"id": parent.id_readable or parent_id, "title": parent.title})
            parent_id = parent.parent_id

        return {
            "article": {"id": article.id_readable or article.id, "title": article.title},
            "ancestors": ancestors,
            "children": article.child_ids,
            "depth": len(ancestors),
        }

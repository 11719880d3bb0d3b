"""Module for YouTrack user operations."""

import logging

from ..models.youtrack import YouTrackUser
from .client import YouTrackClient
from .constants import USER_FIELDS

logger = logging.getLogger("youtrack-mcp.youtrack")


class UsersMixin(YouTrackClient):
    """Mixin for YouTrack user operations."""

    def list_users(self, query: str | None = None, limit: int = 100) -> list[YouTrackUser]:
        params: dict[str, str | int] = {"fields": USER_FIELDS, "$top": limit}
        if query:
            params["query"] = query
        return YouTrackUser.from_api_list(self.get("users", params=params))

    def search_users(self, query: str, limit: int = 50) -> list[YouTrackUser]:
        """Find users whose login, name or email matches the query."""
        return self.list_users(query=query, limit=limit)

    def get_user(self, user_id: str) -> YouTrackUser:
        user = self.get(f"users/{user_id}", params={"fields": USER_FIELDS})
        return YouTrackUser.from_api_response(user or {})

    def get_current_user(self) -> YouTrackUser:
        user = self.get("users/me", params={"fields": USER_FIELDS})
        return YouTrackUser.from_api_response(user or {})

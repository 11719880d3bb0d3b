"""
Base models shared by all YouTrack API models.
"""

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict

EMPTY_STRING = ""
UNKNOWN = "Unknown"

T = TypeVar("T", bound="ApiModel")


class ApiModel(BaseModel):
    """
    Base class for models built from YouTrack REST responses.

    Subclasses parse the raw JSON in ``from_api_response`` and expose the
    shape returned to tool callers in ``to_simplified_dict``.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @classmethod
    def from_api_response(cls: type[T], data: dict[str, Any], **kwargs: Any) -> T:
        raise NotImplementedError("Subclasses must implement from_api_response")

    @classmethod
    def from_api_list(cls: type[T], data: Any, **kwargs: Any) -> list[T]:
        """Parse a list response, skipping anything that is not an object."""
        if not isinstance(data, list):
            return []
        return [cls.from_api_response(item, **kwargs) for item in data if isinstance(item, dict)]

    def to_simplified_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)

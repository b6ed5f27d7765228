"""
Request models for the SUDS gateways.
"""

from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from shared.errors import ValidationError


class InitRequest(BaseModel):
    """Widget init request.

    Accepts both the wire names (``elId``, ``articleId``) and the Python
    names (``element_id``, ``article_id``).
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    element_id: Optional[Union[str, int]] = Field(None, alias="elId", description="ID of the element hosting the widget")
    article_id: Optional[Union[str, int]] = Field(None, alias="articleId", description="Article ID, cache key")
    url: Optional[str] = Field(None, description="Canonical URL of the page")
    title: Optional[str] = Field(None, description="Title of the page")
    stream_type: Optional[str] = Field(None, description="livecomments, livechat or liveblog")
    section: Optional[str] = Field(None, description="Explicit primary section mapping")
    tags: Optional[Union[str, List[str]]] = Field(None, description="Tags added to the collection")
    force: bool = Field(False, description="Skip the cache read")

    @classmethod
    def from_value(cls, value: Union["InitRequest", Mapping[str, Any]]) -> "InitRequest":
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            try:
                return cls.model_validate(dict(value))
            except PydanticValidationError as e:
                raise ValidationError(
                    "Invalid configuration parameters",
                    details={"errors": e.errors(include_url=False)}
                ) from e
        raise TypeError("No configuration parameters provided")

    def missing_fields(self) -> List[str]:
        """Human-readable names of absent mandatory fields, in check order."""
        checks = (
            ("Article ID", self.article_id),
            ("Article URL", self.url),
            ("Element ID", self.element_id),
            ("Article title", self.title),
        )
        return [name for name, value in checks if value is None or value == ""]

    def to_payload(self, session_id: Optional[str] = None) -> Dict[str, Any]:
        """Query payload for the init endpoint."""
        payload: Dict[str, Any] = {
            "title": self.title,
            "url": self.url,
            "articleId": self.article_id,
            "el": self.element_id,
        }
        if session_id:
            payload["sessionId"] = session_id
        if self.stream_type is not None:
            payload["stream_type"] = self.stream_type
        if self.section is not None:
            payload["section"] = self.section
        if self.tags is not None:
            payload["tags"] = self.tags
        return payload

# sitepulse/application/dtos/event_dto.py

"""
Schemas for analytics events sent by the browser SDK.

The SDK speaks camelCase; fields are aliased accordingly and the
owning client is never taken from the body.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class EventBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    url: str = Field(..., min_length=1, description="Page URL")
    time: int = Field(..., description="Client timestamp (ms since epoch)")
    session_id: str = Field(..., alias="sessionId", min_length=1, description="SDK session identifier")

    def to_record(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=False)


class VisitIn(EventBase):
    pass


class PointerEventIn(EventBase):
    x: float = Field(..., description="Horizontal position in px")
    y: float = Field(..., description="Vertical position in px")


class ClickIn(PointerEventIn):
    pass


class ScrollIn(PointerEventIn):
    pass


class PathIn(EventBase):
    prev_url: Optional[str] = Field(None, alias="prevUrl", description="Previous page URL")


class SessionPathsQuery(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., alias="sessionId", min_length=1)
    url: Optional[str] = None


class RemovePathRequest(BaseModel):
    id: int = Field(..., gt=0)


class EventCreatedResponse(BaseModel):
    success: bool = True
    id: int


class EventListResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    client_id: str = Field(..., alias="clientId")
    data: List[Dict[str, Any]]


class RemovePathResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    deleted_count: int = Field(..., alias="deletedCount")


class SessionEventsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., alias="sessionId")
    client_id: str = Field(..., alias="clientId")
    visits: List[Dict[str, Any]]
    clicks: List[Dict[str, Any]]
    paths: List[Dict[str, Any]]
    scroll: List[Dict[str, Any]]

from __future__ import annotations

from enum import Enum
from typing import List, Literal

from pydantic import BaseModel, Field


StatusKind = Literal["loading", "success", "error"]


class ConnectionState(str, Enum):
    NOT_CONNECTED = "not_connected"
    CONNECTED_LIVE = "connected_live"
    CONNECTED_FALLBACK = "connected_fallback"


class ApiStatus(BaseModel):
    message: str
    kind: StatusKind


class ResultsCount(BaseModel):
    visible: int = Field(..., ge=0)
    total: int = Field(..., ge=0)

    @property
    def no_matches(self) -> bool:
        return self.visible == 0 and self.total > 0

    @property
    def message(self) -> str:
        if self.no_matches:
            return "No exercises match your search criteria"
        if self.visible == self.total:
            return f"Showing all {self.total} exercises from ExerciseDB"
        return f"Showing {self.visible} of {self.total} exercises from ExerciseDB"

    def as_tuple(self) -> tuple[int, int]:
        return (self.visible, self.total)


class Facets(BaseModel):
    """Distinct categorical values across the full collection, sorted for option lists."""

    body_parts: List[str] = Field(default_factory=list)
    equipment: List[str] = Field(default_factory=list)
    targets: List[str] = Field(default_factory=list)

"""
VoidSync: wire and state models shared by the Mind and the Void.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MomentContext(BaseModel):
    time: str
    battery: str = "unknown"
    online: bool = True


class Moment(BaseModel):
    """One observed interaction. Never mutated once recorded."""

    model_config = ConfigDict(frozen=True)

    type: str
    timestamp: int
    data: str
    context: MomentContext


class PatternEntry(BaseModel):
    count: int = 0
    occurrences: list[int] = Field(default_factory=list)


class SyncPayload(BaseModel):
    """Body accepted by ``POST /api/void``.

    Every field is optional. ``patterns`` and ``consciousness`` are kept as
    plain JSON so the Void hands back exactly what it was given; the Mind
    validates remote pattern entries itself when merging.
    """

    role: Any = None
    patterns: Optional[dict[str, Any]] = Field(default_factory=dict)
    consciousness: Optional[list[Any]] = Field(default_factory=list)
    timestamp: Optional[int] = None

    @field_validator("patterns", mode="before")
    @classmethod
    def _default_patterns(cls, value: Any) -> Any:
        return value or {}

    @field_validator("consciousness", mode="before")
    @classmethod
    def _default_consciousness(cls, value: Any) -> Any:
        return value or []

    @field_validator("timestamp", mode="before")
    @classmethod
    def _default_timestamp(cls, value: Any) -> Any:
        return value or None


class StoreDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    role: Any = None
    patterns: dict[str, Any] = Field(default_factory=dict)
    consciousness: list[Any] = Field(default_factory=list)
    timestamp: int
    last_update: str = Field(alias="lastUpdate")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)

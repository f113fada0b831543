from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

Unit = Literal["minute", "hour", "day"]

@dataclass(frozen=True)
class TtlSpec:
    value: int
    unit: Unit

@dataclass
class Record:
    id: str
    content: str
    owner_id: str
    created_at: datetime
    expires_at: datetime
    tags: tuple[str, ...] = ()
    is_public: bool = False
    views: int = 0
    last_accessed: datetime | None = None

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at

    def view(self) -> RecordView:
        return RecordView(
            id=self.id, content=self.content, owner_id=self.owner_id,
            created_at=self.created_at, expires_at=self.expires_at,
            tags=self.tags, is_public=self.is_public,
            views=self.views, last_accessed=self.last_accessed,
        )

    def preview(self, length: int = 100) -> Preview:
        text = self.content[:length]
        if len(self.content) > length:
            text += "..."
        return Preview(
            id=self.id, preview=text, created_at=self.created_at,
            expires_at=self.expires_at, tags=self.tags, views=self.views,
        )

@dataclass(frozen=True)
class RecordView:
    id: str
    content: str
    owner_id: str
    created_at: datetime
    expires_at: datetime
    tags: tuple[str, ...]
    is_public: bool
    views: int
    last_accessed: datetime | None

@dataclass(frozen=True)
class Preview:
    id: str
    preview: str
    created_at: datetime
    expires_at: datetime
    tags: tuple[str, ...]
    views: int

@dataclass(frozen=True)
class SaveResult:
    code: str
    expires_at: datetime

@dataclass(frozen=True)
class Page:
    items: list[Preview] = field(default_factory=list)
    page: int = 1
    limit: int = 10
    total: int = 0
    total_pages: int = 0
    has_next: bool = False
    has_prev: bool = False

"""
Shared fixtures: a controllable clock, a store bound to it, a temp SQLite DB.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from savebot import db
from savebot.state.store import SaveStore


class FakeClock:
    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> SaveStore:
    return SaveStore(clock=clock)


@pytest.fixture
def db_path(tmp_path, monkeypatch) -> str:
    """Point savebot.db at a throwaway SQLite file."""
    path = str(tmp_path / "data" / "db.sqlite3")
    monkeypatch.setattr(db, "DB_PATH", path)
    return path


def make_message(user_id: int = 1, chat_id: int = 100, text: str = "", reply_text: str | None = None):
    """Minimal stand-in for aiogram Message: only what the handlers touch."""
    reply = SimpleNamespace(text=reply_text, caption=None) if reply_text is not None else None
    return SimpleNamespace(
        from_user=SimpleNamespace(id=user_id),
        chat=SimpleNamespace(id=chat_id),
        text=text,
        reply_to_message=reply,
        answer=AsyncMock(),
    )


def make_callback(data: str, user_id: int = 1, chat_id: int = 100):
    return SimpleNamespace(
        data=data,
        from_user=SimpleNamespace(id=user_id),
        message=SimpleNamespace(chat=SimpleNamespace(id=chat_id), edit_text=AsyncMock()),
        answer=AsyncMock(),
    )

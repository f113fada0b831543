# savebot/state/expiry.py
from __future__ import annotations
import logging, re
from collections.abc import Mapping
from datetime import datetime, timedelta
from typing import Any

from ..models import TtlSpec

log = logging.getLogger("savebot.expiry")

DEFAULT_TTL = timedelta(days=7)

UNITS = {
    "m": "minute", "min": "minute", "mins": "minute", "minute": "minute", "minutes": "minute",
    "h": "hour", "hr": "hour", "hrs": "hour", "hour": "hour", "hours": "hour",
    "d": "day", "day": "day", "days": "day",
}
_DELTA = {
    "minute": lambda v: timedelta(minutes=v),
    "hour": lambda v: timedelta(hours=v),
    "day": lambda v: timedelta(days=v),
}
TTL_RE = re.compile(r"^(\d+)\s*([a-z]+)$", re.I)

def parse_ttl(text: str | None) -> TtlSpec | None:
    """'30m', '2h', '7d', '3 days' -> TtlSpec; anything else -> None."""
    m = TTL_RE.match((text or "").strip())
    if not m:
        return None
    unit = UNITS.get(m.group(2).lower())
    if not unit:
        return None
    return TtlSpec(int(m.group(1)), unit)

def _coerce(ttl: Any) -> TtlSpec | None:
    if isinstance(ttl, TtlSpec):
        spec = ttl
    elif isinstance(ttl, str):
        spec = parse_ttl(ttl)
    elif isinstance(ttl, Mapping):
        unit = UNITS.get(str(ttl.get("unit", "")).lower())
        value = ttl.get("value")
        spec = TtlSpec(value, unit) if unit else None
    else:
        spec = None
    if spec is None or spec.unit not in _DELTA:
        return None
    if isinstance(spec.value, bool) or not isinstance(spec.value, int) or spec.value <= 0:
        return None
    return spec

def ttl_delta(ttl: Any) -> timedelta:
    if ttl is None:
        return DEFAULT_TTL
    spec = _coerce(ttl)
    if spec is None:
        # Политика "сохранение не блокируем": кривой TTL -> 7 дней
        log.warning("Malformed TTL %r, falling back to %s", ttl, DEFAULT_TTL)
        return DEFAULT_TTL
    try:
        return _DELTA[spec.unit](spec.value)
    except OverflowError:
        log.warning("TTL %r out of range, falling back to %s", ttl, DEFAULT_TTL)
        return DEFAULT_TTL

def compute_expiry(created_at: datetime, ttl: Any = None) -> datetime:
    """Absolute expiry for a record created at ``created_at``.

    ``ttl`` is a TtlSpec, a ``{"value", "unit"}`` mapping, a short string
    such as ``"2h"`` or None (7 days). Malformed values never fail the save,
    they degrade to the 7-day default with a warning.
    """
    try:
        return created_at + ttl_delta(ttl)
    except OverflowError:
        log.warning("Expiry for TTL %r overflows, falling back to %s", ttl, DEFAULT_TTL)
        return created_at + DEFAULT_TTL

# savebot/state/store.py
from __future__ import annotations
import asyncio, logging, time
from datetime import datetime, timezone
from typing import Any, Callable, Iterable

from ..models import Page, Record, RecordView, SaveResult
from .access import can_read
from .codes import generate_code, normalize_code
from .errors import AccessDenied, Expired, NotFound, ValidationError
from .expiry import compute_expiry
from .pagination import clamp_limit, paginate

log = logging.getLogger("savebot.store")

MAX_CODE_ATTEMPTS = 16

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

def _clean_tags(tags: Iterable[str] | str | None) -> tuple[str, ...]:
    if tags is None:
        return ()
    if isinstance(tags, str):
        tags = [tags]
    out = []
    for t in tags:
        t = str(t).strip().lstrip("#").strip()
        if t:
            out.append(t)
    return tuple(out)


class OwnerIndex:
    """Per-owner codes in creation order. Holds codes only, never records."""

    def __init__(self, cap: int = 50):
        self.cap = cap
        self._by_owner: dict[str, dict[str, None]] = {}

    def register(self, owner_id: str, code: str) -> list[str]:
        """Append ``code``; return the oldest codes that overflow the cap."""
        bucket = self._by_owner.setdefault(owner_id, {})
        bucket[code] = None
        overflow = []
        while len(bucket) > self.cap:
            oldest = next(iter(bucket))
            del bucket[oldest]
            overflow.append(oldest)
        return overflow

    def unregister(self, owner_id: str, code: str) -> None:
        bucket = self._by_owner.get(owner_id)
        if bucket is None:
            return
        bucket.pop(code, None)
        if not bucket:
            del self._by_owner[owner_id]

    def codes(self, owner_id: str) -> list[str]:
        return list(self._by_owner.get(owner_id, ()))

    def owners(self) -> int:
        return len(self._by_owner)

    def clear(self) -> None:
        self._by_owner.clear()


class SaveStore:
    """In-memory content store with TTL, per-owner cap and visibility.

    One asyncio.Lock guards records and the owner index together, so every
    store+index update is atomic with respect to other requests and sweeps.
    """

    def __init__(
        self,
        *,
        max_content: int = 10_000,
        owner_cap: int = 50,
        preview_len: int = 100,
        page_limit: int = 10,
        code_prefix: str = "SAVE",
        clock: Callable[[], datetime] = utcnow,
        code_factory: Callable[[str], str] = generate_code,
    ):
        self.max_content = max_content
        self.preview_len = preview_len
        self.page_limit = page_limit
        self.code_prefix = (code_prefix or "SAVE").strip().upper()
        self._clock = clock
        self._new_code = code_factory
        self._records: dict[str, Record] = {}
        self._index = OwnerIndex(cap=owner_cap)
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._records)

    # --- write path ---------------------------------------------------------

    async def put(self, content: str, owner_id: str, ttl: Any = None,
                  tags: Iterable[str] | str | None = (), is_public: bool = False) -> SaveResult:
        if not content or not str(content).strip():
            raise ValidationError("Content to save is required", "MISSING_CONTENT")
        if not owner_id:
            raise ValidationError("User ID is required", "MISSING_USER_ID")
        content = str(content)
        if len(content) > self.max_content:
            raise ValidationError(
                f"Content must be at most {self.max_content:,} characters", "CONTENT_TOO_LARGE")
        owner_id = str(owner_id)

        async with self._lock:
            now = self._clock()
            code = self._unique_code()
            record = Record(
                id=code, content=content, owner_id=owner_id,
                created_at=now, expires_at=compute_expiry(now, ttl),
                tags=_clean_tags(tags), is_public=bool(is_public),
            )
            self._records[code] = record
            self._prune_owner(owner_id, now)
            for old in self._index.register(owner_id, code):
                self._records.pop(old, None)
                log.info("Evicted %s (owner=%s over cap)", old, owner_id)
        log.debug("Saved %s owner=%s expires=%s", code, owner_id, record.expires_at.isoformat())
        return SaveResult(code=code, expires_at=record.expires_at)

    def _unique_code(self) -> str:
        for _ in range(MAX_CODE_ATTEMPTS):
            code = self._new_code(self.code_prefix)
            if code not in self._records:
                return code
            log.warning("Code collision on %s, regenerating", code)
        raise RuntimeError("could not generate a unique save code")

    def _prune_owner(self, owner_id: str, now: datetime) -> None:
        # чтобы лимит считал только живые записи
        for code in self._index.codes(owner_id):
            rec = self._records.get(code)
            if rec is None or rec.is_expired(now):
                self._remove(code, owner_id)

    def _remove(self, code: str, owner_id: str | None = None) -> bool:
        rec = self._records.pop(code, None)
        if rec is not None:
            owner_id = rec.owner_id
        if owner_id is not None:
            self._index.unregister(owner_id, code)
        return rec is not None

    async def delete(self, code: str) -> bool:
        """Remove if present. Deleting an unknown code is a no-op."""
        async with self._lock:
            return self._remove(normalize_code(code))

    # --- read path ----------------------------------------------------------

    async def get(self, code: str, caller_id: str | None = None) -> RecordView:
        code = normalize_code(code)
        caller_id = str(caller_id) if caller_id is not None else None
        async with self._lock:
            rec = self._records.get(code)
            if rec is None:
                raise NotFound("Save code not found or expired")
            now = self._clock()
            if rec.is_expired(now):
                self._remove(code)
                log.info("Lazy expiry of %s", code)
                raise Expired("This save has expired")
            if not can_read(rec, caller_id):
                raise AccessDenied("You do not have permission to view this save")
            rec.views += 1
            rec.last_accessed = now
            return rec.view()

    async def list(self, owner_id: str, page: int = 1, limit: int | None = None) -> Page:
        limit = clamp_limit(limit if limit is not None else self.page_limit, self.page_limit)
        try:
            page = int(page)
        except (TypeError, ValueError):
            page = 1
        if not owner_id:
            return Page(page=page, limit=limit)
        async with self._lock:
            now = self._clock()
            live = []
            for code in self._index.codes(str(owner_id)):
                rec = self._records.get(code)
                if rec is not None and not rec.is_expired(now):
                    live.append(rec)
            chunk, meta = paginate(live, page, limit)
            items = [r.preview(self.preview_len) for r in chunk]
        return Page(items=items, **meta)

    # --- maintenance --------------------------------------------------------

    async def sweep(self, now: datetime | None = None, batch: int = 500,
                    budget: float | None = None) -> int:
        """Delete every record with ``expires_at <= now``.

        Works on a snapshot of codes in batches and re-reads each record
        under the lock, so concurrent put/get are fine. Stops when ``budget``
        seconds are spent; the rest is picked up by the next pass.
        """
        batch = max(1, batch)
        started = time.monotonic()
        async with self._lock:
            codes = list(self._records)
        removed = 0
        for i in range(0, len(codes), batch):
            async with self._lock:
                ts = now or self._clock()
                for code in codes[i:i + batch]:
                    rec = self._records.get(code)
                    if rec is not None and rec.expires_at <= ts:
                        self._remove(code)
                        removed += 1
            if budget is not None and time.monotonic() - started >= budget:
                log.warning("Sweep budget %.1fs spent after %d/%d codes",
                            budget, min(i + batch, len(codes)), len(codes))
                break
            await asyncio.sleep(0)
        return removed

    async def stats(self) -> dict:
        async with self._lock:
            return {"records": len(self._records), "owners": self._index.owners()}

    async def clear(self) -> None:
        async with self._lock:
            self._records.clear()
            self._index.clear()

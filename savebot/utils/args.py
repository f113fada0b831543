# savebot/utils/args.py
from __future__ import annotations
import re
from dataclasses import dataclass, field

from ..models import TtlSpec
from ..state.expiry import parse_ttl

TOKEN_RE = re.compile(r"^\s*(\S+)(?:[ \t]+|(?=\n)|$)")
PUBLIC = {"public", "pub", "публично"}
PRIVATE = {"private", "priv", "приватно"}

@dataclass
class SaveArgs:
    content: str = ""
    ttl: TtlSpec | None = None
    is_public: bool = False
    tags: list[str] = field(default_factory=list)

def parse_save_args(text: str | None) -> SaveArgs:
    """Разбираем ``[ttl] [public|private] [#tag ...] текст``.

    Options are only read from the head of the text; the first token that
    is not an option starts the content, which is kept verbatim.
    """
    args = SaveArgs()
    rest = text or ""
    while True:
        m = TOKEN_RE.match(rest)
        if not m:
            break
        tok = m.group(1)
        low = tok.lower()
        if low in PUBLIC:
            args.is_public = True
        elif low in PRIVATE:
            args.is_public = False
        elif tok.startswith("#") and len(tok) > 1:
            args.tags.append(tok[1:])
        elif args.ttl is None and (ttl := parse_ttl(tok)) is not None:
            args.ttl = ttl
        else:
            break
        rest = rest[m.end():]
    args.content = rest.strip()
    return args

def parse_page(text: str | None, default: int = 1) -> int:
    try:
        return max(1, int((text or "").strip()))
    except ValueError:
        return default

import secrets

# без 0/O, 1/I/L
ALPHABET = "ABCDEFGHJKMNPQRSTUVWXYZ23456789"
CODE_LEN = 6

def generate_code(prefix: str = "SAVE") -> str:
    """Readable code like SAVE-K7M2QX. Uniqueness is checked by the store."""
    body = "".join(secrets.choice(ALPHABET) for _ in range(CODE_LEN))
    return f"{prefix}-{body}"

def normalize_code(code: str | None) -> str:
    return (code or "").strip().upper()

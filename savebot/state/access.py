from ..models import Record

def can_read(record: Record, caller_id: str | None) -> bool:
    return record.is_public or record.owner_id == caller_id

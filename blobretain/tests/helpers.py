from datetime import datetime, timezone

from blobretain.core.models import FileRecord

BASE_EPOCH = 1_700_000_000


def ts(offset: int) -> datetime:
    """UTC timestamp a fixed number of seconds after a common base."""
    return datetime.fromtimestamp(BASE_EPOCH + offset, tz=timezone.utc)


def rec(name: str, offset=None) -> FileRecord:
    return FileRecord(name=name, last_modified=ts(offset) if offset is not None else None)

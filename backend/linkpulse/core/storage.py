import json
from typing import Any, Optional
from sqlalchemy.orm import Session


def read_slot(db: Session, key: str) -> Optional[Any]:
    """
    Read and decode the JSON value stored under a key.

    Args:
        db: Database session
        key: Slot key

    Returns:
        The decoded value, or None if the slot is absent

    Raises:
        ValueError: If the stored value is not valid JSON
    """
    from ..models import KeyValueEntry

    entry = db.get(KeyValueEntry, key)
    if entry is None:
        return None

    return json.loads(entry.value)


def write_slot(db: Session, key: str, value: Any) -> None:
    """
    Overwrite a slot with the JSON encoding of value and commit.

    Args:
        db: Database session
        key: Slot key
        value: JSON-serializable value
    """
    from ..models import KeyValueEntry

    payload = json.dumps(value, ensure_ascii=False)

    entry = db.get(KeyValueEntry, key)
    if entry is None:
        db.add(KeyValueEntry(key=key, value=payload))
    else:
        entry.value = payload

    db.commit()

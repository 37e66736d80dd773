from __future__ import annotations

from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from .models import ReferenceCacheEntry


def get_cached_reference(db: Session, reference: str) -> Optional[ReferenceCacheEntry]:
    return db.execute(
        select(ReferenceCacheEntry).where(ReferenceCacheEntry.reference == reference)
    ).scalar_one_or_none()


def store_cached_reference(db: Session, reference: str, url: Optional[str]) -> ReferenceCacheEntry:
    entry = get_cached_reference(db, reference)
    if entry is None:
        entry = ReferenceCacheEntry(reference=reference, url=url)
        db.add(entry)
    else:
        entry.url = url
    db.commit()
    db.refresh(entry)
    return entry


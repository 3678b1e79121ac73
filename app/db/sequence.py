from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session


def next_seq(db: Session, model) -> int:
    """
    Next insertion-order number for `model`. Callers hold the lifecycle
    lock and flush after each insert, so pending rows are counted.
    """
    current = db.execute(select(func.max(model.seq))).scalar()
    return (current or 0) + 1

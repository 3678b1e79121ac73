from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session

# Process-wide: serializes every lifecycle mutation (review, revoke, unlist, ...).
_LIFECYCLE_LOCK = threading.RLock()


@contextmanager
def lifecycle_transaction(db: Session) -> Iterator[Session]:
    """
    Run a multi-step lifecycle operation as one unit.

    - Serializes against every other lifecycle operation in the process
    - Commits once at the end
    - Rolls back everything on any exception

    Nested use (a service calling another service) joins the outer unit:
    only the outermost block commits.
    """
    with _LIFECYCLE_LOCK:
        depth = db.info.get("lifecycle_depth", 0)
        db.info["lifecycle_depth"] = depth + 1
        try:
            yield db
            if depth == 0:
                db.commit()
        except Exception:
            if depth == 0:
                db.rollback()
            raise
        finally:
            db.info["lifecycle_depth"] = depth

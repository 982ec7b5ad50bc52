from sqlalchemy.orm import Session
from typing import Any, Callable, Optional
import logging

logger = logging.getLogger(__name__)

def run_best_effort(db: Session, action: str, handler: Callable[..., Any], **kwargs) -> Optional[Any]:
    """
    Run ``handler(db, **kwargs)`` after the primary write has committed.

    A failure is logged and swallowed; the session is rolled back so the
    remaining follow-up steps start clean. Returns the handler's result, or
    None if it failed.
    """
    try:
        return handler(db, **kwargs)
    except Exception:
        db.rollback()
        logger.error(f"Best-effort step '{action}' failed", exc_info=True)
        return None

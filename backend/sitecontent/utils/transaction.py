import logging
from contextlib import contextmanager
from sitecontent.extensions import db

logger = logging.getLogger(__name__)

@contextmanager
def transactional(action: str = "transaction"):
    """Commit the session on success; roll back and re-raise on failure."""
    try:
        yield db.session
        db.session.commit()
    except Exception:
        db.session.rollback()
        logger.debug("Rolled back %s", action)
        raise

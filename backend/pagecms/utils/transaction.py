from contextlib import contextmanager

from flask import current_app

from pagecms.extensions import db


@contextmanager
def transactional():
    """
    Unit of work around ``db.session``: commit when the block finishes,
    roll back and re-raise when it fails.
    """
    try:
        yield db.session
        db.session.commit()
    except Exception as exc:
        db.session.rollback()
        current_app.logger.debug("Transaction rolled back: %r", exc)
        raise

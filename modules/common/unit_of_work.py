from contextlib import contextmanager

from flask import current_app
from sqlalchemy.exc import IntegrityError

from extensions import db
from modules.common.errors import from_integrity_error


@contextmanager
def atomic():
    """
    Одна атомарна одиниця роботи: commit, якщо блок виконався без винятків,
    інакше rollback усього (шапка, рядки, рух складу, залишки).
    """
    try:
        yield db.session
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        current_app.logger.warning("IntegrityError caught: %s", getattr(e, "orig", e))
        raise from_integrity_error(e) from e
    except Exception:
        db.session.rollback()
        raise

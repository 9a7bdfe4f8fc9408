from contextlib import contextmanager
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from db.base import Base
import db.schemas  # noqa: F401  registers the tables on Base.metadata

_engine = None
_Session = None


def init_engine(db_url: str, create_tables: bool = True, **engine_kw):
    global _engine, _Session
    _engine = create_engine(db_url, future=True, **engine_kw)
    if create_tables:
        Base.metadata.create_all(_engine)
    _Session = sessionmaker(bind=_engine, expire_on_commit=False)
    return _engine


def session_factory() -> sessionmaker:
    if _Session is None:
        raise RuntimeError("init_engine() must be called before opening sessions")
    return _Session


@contextmanager
def get_session():
    # Read-only pipeline: nothing to commit, but roll back whatever a failed query left open
    sess = session_factory()()
    try:
        yield sess
    except Exception:
        sess.rollback()
        raise
    finally:
        sess.close()

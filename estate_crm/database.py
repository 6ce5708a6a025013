from sqlmodel import SQLModel, create_engine
from sqlalchemy.engine import Engine

from .config import settings


def build_engine(url: str = None, echo: bool = None) -> Engine:
    url = url or settings.SESSION_DATABASE_URL
    echo = settings.DATABASE_ECHO if echo is None else echo
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, echo=echo, connect_args=connect_args)


def init_db(bind: Engine) -> None:
    # Only the session record table is persisted
    from estate_crm.models.session import SessionRecord  # noqa: F401

    SQLModel.metadata.create_all(bind)

"""
EstateCRM engine - application factory.
Builds a ready console with logging, session storage and optional demo data.
"""
import logging
from typing import Optional

from sqlalchemy.engine import Engine

from estate_crm.config import Settings, settings as default_settings
from estate_crm.console import CRMConsole
from estate_crm.core.clock import Clock, system_clock
from estate_crm.database import build_engine, init_db
from estate_crm.repositories.session_repo import SessionRepository
from estate_crm.repositories.store import EntityStore

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


def create_console(
    config: Optional[Settings] = None,
    clock: Clock = system_clock,
    db_engine: Optional[Engine] = None
) -> CRMConsole:
    """Create and initialize a console."""
    config = config or default_settings
    configure_logging(config.LOG_LEVEL)

    db_engine = db_engine or build_engine(config.SESSION_DATABASE_URL, config.DATABASE_ECHO)
    init_db(db_engine)

    console = CRMConsole(
        store=EntityStore(clock=clock, config=config),
        session_repo=SessionRepository(db_engine),
        config=config
    )
    console.init()

    if console.user:
        logger.info(f"Restored session for {console.user.role.value} '{console.user.id}'")
    logger.info("EstateCRM console ready")
    return console

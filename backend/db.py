import logging
import os
from sqlmodel import Session, SQLModel, create_engine

logger = logging.getLogger(__name__)


def resolve_database_url(environ=os.environ) -> str:
    """Pick the call sheet database from the environment.

    ``DATABASE_URL`` wins. Without it a local SQLite file at ``DATABASE_PATH``
    is used, except on a production deploy where losing productions, crew and
    looks to an ephemeral file is not acceptable.
    """
    url = environ.get("DATABASE_URL")
    if not url:
        env = environ.get("ENV", environ.get("RENDER", "").lower() or "dev")
        if env in ("prod", "production") or environ.get("RENDER"):
            raise RuntimeError(
                "DATABASE_URL missing in production; refusing to keep call sheets in SQLite. "
                "Please configure DATABASE_URL environment variable."
            )
        url = f"sqlite:///{environ.get('DATABASE_PATH', './callsheet.db')}"

    # SQLAlchemy only accepts the postgresql:// scheme
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)
    return url


DATABASE_URL = resolve_database_url()
logger.info(f"DB_URL_DRIVER={DATABASE_URL.split(':', 1)[0]}")

# Request handlers and migrations share one SQLite connection pool across threads
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {},
    echo=False,
)


def create_db_and_tables():
    """Create the production, crew and look tables if missing; existing rows are kept."""
    import models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def get_session():
    with Session(engine) as session:
        yield session

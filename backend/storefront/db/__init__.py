import importlib

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from storefront.config import settings
from storefront.utils.logging import get_logger

log = get_logger(__name__)

DATABASE_URL = settings.DATABASE_URL


def _connect_args(url: str) -> dict:
    """Bound every connection wait by DB_TIMEOUT_SECONDS."""
    if url.startswith("sqlite"):
        return {"check_same_thread": False, "timeout": settings.DB_TIMEOUT_SECONDS}
    if url.startswith("postgresql"):
        return {
            "connect_timeout": settings.DB_TIMEOUT_SECONDS,
            "options": f"-c statement_timeout={settings.DB_TIMEOUT_SECONDS * 1000}",
        }
    return {}


engine_kwargs = {"future": True, "echo": False, "connect_args": _connect_args(DATABASE_URL)}
if not DATABASE_URL.startswith("sqlite"):
    engine_kwargs["pool_timeout"] = settings.DB_TIMEOUT_SECONDS
    engine_kwargs["pool_pre_ping"] = True

engine = create_engine(DATABASE_URL, **engine_kwargs)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

# largest value every backend stores in an Integer column (PostgreSQL INTEGER)
MAX_ROW_ID = 2**31 - 1

# imported so Base.metadata knows every table before create_all
MODEL_MODULES = [
    "storefront.models.user",
    "storefront.models.product",
    "storefront.models.cart_item",
    "storefront.models.order",
]


def init_db(reset: bool = False):
    """
    Create the schema. With reset=True (or RESET_DB set) drop every table first.
    """
    for mod in MODEL_MODULES:
        importlib.import_module(mod)

    if reset or settings.RESET_DB:
        log.info("Dropping all tables")
        Base.metadata.drop_all(bind=engine)

    Base.metadata.create_all(bind=engine)
    log.info("Database initialized: %s", sorted(Base.metadata.tables))


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

# PHM/backend/phm/database.py

from sqlalchemy import create_engine, text
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi import Request
import logging

logger = logging.getLogger(__name__)

# Base for the models (tables)
Base = declarative_base()


class Database:
    """
    Owns the engine and the session factory for one process.
    Built by the application lifespan and closed at shutdown; nothing
    in the package keeps a module-level connection.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        options = {"echo": echo, "pool_pre_ping": True}
        if url.startswith("sqlite"):
            options["connect_args"] = {"check_same_thread": False}
            if url in ("sqlite://", "sqlite:///:memory:"):
                # One shared connection, otherwise every session sees an empty database
                options["poolclass"] = StaticPool
        else:
            options["pool_size"] = 5
            options["max_overflow"] = 10

        self.engine = create_engine(url, **options)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        logger.info(f"✅ Database engine ready: {url.split('://')[0]}://****")

    def session(self):
        return self.SessionLocal()

    def create_tables(self):
        """Create every table declared on Base"""
        # Registers the models on Base.metadata
        from phm.models import models  # noqa: F401
        Base.metadata.create_all(bind=self.engine)
        logger.info("✅ Tables created/checked")

    def drop_tables(self):
        """Drop every table (USE WITH CARE)"""
        Base.metadata.drop_all(bind=self.engine)
        logger.warning("⚠️ All tables dropped")

    def check_connection(self):
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"❌ Database connection error: {e}")
            return False

    def close(self):
        self.engine.dispose()
        logger.info("👋 Database engine disposed")


# FastAPI dependency
def get_db(request: Request):
    """
    One session per request, taken from the Database stored on app.state.
    Use in routes with: db: Session = Depends(get_db)
    """
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()

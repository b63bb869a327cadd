from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from runtracker.core.config import settings

# SQLAlchemy Base class for models to inherit
Base = declarative_base()

# SQLite needs cross-thread access because FastAPI runs sync routes in a threadpool
_connect_args = (
    {"check_same_thread": False}
    if settings.database_url.startswith("sqlite")
    else {}
)

engine = create_engine(
    settings.database_url,
    pool_pre_ping=True,   # helps avoid stale connections
    connect_args=_connect_args,
)

# Factory that creates DB sessions
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


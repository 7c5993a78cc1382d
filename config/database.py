from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from config.settings import settings

DATABASE_URL = settings.DATABASE_URL


def build_engine(url: str = DATABASE_URL):
    """Create an engine; sqlite gets thread-sharing, servers get a tuned pool."""
    if url.startswith("sqlite"):
        return create_engine(
            url,
            echo=settings.DEBUG,
            connect_args={"check_same_thread": False},
        )
    return create_engine(
        url,
        # Connection pooling settings
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_pre_ping=True,
        pool_recycle=settings.DB_POOL_RECYCLE,
        # Only echo SQL queries in debug mode
        echo=settings.DEBUG,
        connect_args={
            "options": "-c timezone=utc"
        } if "postgresql" in url else {}
    )


engine = build_engine()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

# legal_search/db/session.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from legal_search.core.config import DATABASE_URL

# Create a SQLAlchemy engine instance. No connection is opened until the
# first query, so importing this module never touches the database.
engine = create_engine(DATABASE_URL, pool_pre_ping=True)

# Each instance of SessionLocal is one database session. Sessions are not
# shared between threads: every store call opens its own.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """FastAPI dependency yielding a session that is closed after the request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

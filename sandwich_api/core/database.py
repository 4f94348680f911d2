"""
Database configuration and connection management
"""
import logging
from decimal import Decimal

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sandwich_api.core.config import settings

logger = logging.getLogger(__name__)

# SQLAlchemy setup
_connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}

engine = create_engine(
    settings.database_url,
    pool_pre_ping=True,
    echo=False,  # Set to True for SQL query logging
    connect_args=_connect_args,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

SAMPLE_SANDWICHES = [
    ("BLT", "Bacon, Lettuce, Tomato", Decimal("6.99")),
    ("Turkey Club", "Turkey, Bacon, Lettuce", Decimal("8.49")),
    ("Veggie", "Grilled Veggies and Hummus", Decimal("7.25")),
]

DEFAULT_OPTIONS = {
    "breads": ["White", "Wheat", "Sourdough", "Rye", "Italian Herb"],
    "cheeses": ["Swiss", "Cheddar", "Provolone", "Pepper Jack"],
    "dressings": ["Mayo", "Mustard", "Ranch", "Oil & Vinegar"],
    "meats": ["Turkey", "Ham", "Roast Beef", "Salami", "Bacon"],
    "toppings": ["Lettuce", "Tomato", "Onion", "Pickles", "Jalapenos"],
}


def get_db() -> Session:
    """Get database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables(bind=None):
    """Create all database tables"""
    # models must be imported so their tables are registered on Base
    from sandwich_api.models import catalog, sandwich, user  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


def drop_tables(bind=None):
    """Drop all database tables (for testing/reset)"""
    Base.metadata.drop_all(bind=bind or engine)


def seed_sample_data(db: Session) -> None:
    """Seed sample sandwiches and catalog options when the tables are empty"""
    from sandwich_api.models.catalog import Option
    from sandwich_api.models.sandwich import Sandwich

    if db.query(Sandwich).first() is None:
        logger.info("Seeding sample sandwiches")
        for name, description, price in SAMPLE_SANDWICHES:
            db.add(Sandwich(name=name, description=description, price=price))

    if db.query(Option).first() is None:
        logger.info("Seeding default catalog options")
        for category, names in DEFAULT_OPTIONS.items():
            for name in names:
                db.add(Option(category=category, name=name))

    db.commit()


def init_db() -> None:
    """Create tables and seed data for the SQLite fallback database"""
    if not settings.uses_fallback_db:
        return
    create_tables()
    if settings.SEED_SAMPLE_DATA:
        db = SessionLocal()
        try:
            seed_sample_data(db)
        finally:
            db.close()

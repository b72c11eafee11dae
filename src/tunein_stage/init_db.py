# src/tunein_stage/init_db.py
"""Create tables and seed default clubs for local development databases."""

from tunein_stage.db.session import SessionLocal, create_tables
from tunein_stage.services.club_service import seed_default_clubs


def init_db() -> int:
    """Initialize the database by creating all tables and seeding clubs."""
    create_tables()
    db = SessionLocal()
    try:
        return seed_default_clubs(db)
    finally:
        db.close()


if __name__ == "__main__":
    added = init_db()
    print(f"Database initialized ({added} clubs seeded).")

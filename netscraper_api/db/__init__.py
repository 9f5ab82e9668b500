"""Database Package — SQLAlchemy declarative Base shared by ORM models and Alembic."""

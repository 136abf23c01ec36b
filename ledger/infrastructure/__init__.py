"""Infrastructure adapters backed by SQLAlchemy."""

"""
Database base configuration
"""
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


# Import all models here to ensure they are registered with SQLAlchemy
def import_models():
    """Import all models to register them with SQLAlchemy"""
    from app.models import site, role, user, admin_user, eco_location, eco_project  # noqa: F401

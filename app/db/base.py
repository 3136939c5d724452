"""
Base database configuration.

Import all models here so Alembic can detect them for migrations.
"""

# Import all models for Alembic autogenerate
from app.models.training_log import TrainingLog  # noqa: F401
from app.models.sparring_session import SparringSession  # noqa: F401

"""Import all models here so metadata.create_all sees every table."""

from beefmusic.db.base_class import Base
from beefmusic.models import song, submission, user  # noqa: F401

__all__ = ["Base"]

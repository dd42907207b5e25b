"""
Storage module - Transcript persistence.
"""

from echonote.services.storage.database import Base, Database
from echonote.services.storage.models_db import Transcript
from echonote.services.storage.repository import TranscriptRepository

__all__ = [
    "Base",
    "Database",
    "Transcript",
    "TranscriptRepository",
]

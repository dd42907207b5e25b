"""
Audio module - Handling of uploaded audio files.
"""

from .uploads import stage_upload

__all__ = ["stage_upload"]

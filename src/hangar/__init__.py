"""Hangar upload support.

- files.py: expands file inputs into local upload files and Hangar file entries
- client.py: authentication and version upload against the Hangar API
"""

from .client import HangarClient, HangarError
from .files import FileProcessingError, FileProcessor

__all__ = [
    "HangarClient",
    "HangarError",
    "FileProcessingError",
    "FileProcessor",
]

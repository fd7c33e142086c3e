"""Turns file inputs into the files part of a Hangar version upload."""

from __future__ import annotations

import glob
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from inputs import FileInput

logger = logging.getLogger(__name__)


class FileProcessingError(Exception):
    """Raised when a file input cannot be turned into an upload entry."""


@dataclass
class UploadFile:
    """A local file sent as a multipart 'files' part."""
    path: str
    platforms: List[str]

    @property
    def name(self) -> str:
        return os.path.basename(self.path)


class FileProcessor:
    """Expands path globs and external URLs, in input order.

    Args:
        base_dir: Directory relative globs are evaluated in; defaults to the CWD.
    """

    def __init__(self, base_dir: Optional[str] = None):
        self.base_dir = base_dir

    def process_files(self, file_inputs: Sequence[FileInput]) -> Tuple[List[UploadFile], List[Dict[str, Any]]]:
        """Build the upload files and the matching versionUpload.files entries.

        Returns:
            (upload_files, files_data): local files to attach, and one entry per
            attached file or external URL, in the order Hangar pairs them.

        Raises:
            FileProcessingError: A glob matched nothing, or matched a non-file.
        """
        upload_files: List[UploadFile] = []
        files_data: List[Dict[str, Any]] = []
        logger.info("Processing %d file input(s)", len(file_inputs))

        for index, file_input in enumerate(file_inputs):
            logger.debug("Processing file input %d: %s", index, file_input)
            try:
                if file_input.path:
                    for path in self._expand(file_input.path):
                        upload_files.append(UploadFile(path=path, platforms=list(file_input.platforms)))
                        files_data.append({"platforms": list(file_input.platforms)})
                        logger.debug("Added file: %s", path)
                elif file_input.url and file_input.external_url:
                    files_data.append({
                        "platforms": list(file_input.platforms),
                        "url": True,
                        "externalUrl": file_input.external_url,
                    })
                    logger.debug("Added external file: %s", file_input.external_url)
                else:
                    raise FileProcessingError(f"Invalid file configuration: {file_input}")
            except FileProcessingError as exc:
                logger.error("Failed to process file at index %d: %s", index, exc)
                raise FileProcessingError(f"File processing failed at index {index}: {exc}") from exc

        logger.info("Successfully processed %d file(s)", len(files_data))
        return upload_files, files_data

    def _expand(self, pattern: str) -> List[str]:
        """Resolve pattern to absolute paths of regular files."""
        full_pattern = pattern
        if self.base_dir and not os.path.isabs(pattern):
            full_pattern = os.path.join(self.base_dir, pattern)

        matches = sorted(os.path.abspath(p) for p in glob.glob(full_pattern, recursive=True))
        if not matches:
            raise FileProcessingError(f"No files found matching pattern: {pattern}")
        logger.info("Found %d file(s) matching pattern: %s", len(matches), pattern)

        for path in matches:
            if not os.path.isfile(path):
                raise FileProcessingError(f"Path is not a file: {path}")
        return matches

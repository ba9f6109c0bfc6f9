"""
Error types for the extraction pipeline.

Every stage raises one of these; the CLI turns them into a single failure
message and a non-zero exit status.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class ExtractError(Exception):
    """Base exception for extraction runs."""
    pass


class AdminMappingError(ExtractError):
    """Error in the admin level mapping file."""
    pass


class ConfigReadError(AdminMappingError):
    """Mapping file could not be read from disk."""
    def __init__(self, path: Path | str, message: str):
        self.path = Path(path)
        super().__init__(f"could not read mapping file {self.path}: {message}")


class ConfigParseError(AdminMappingError):
    """Mapping file was read but its structure is invalid."""
    def __init__(self, path: Path | str, message: str):
        self.path = Path(path)
        super().__init__(f"could not parse mapping file {self.path}: {message}")


class FetchError(ExtractError):
    """Boundary download failed (network, HTTP status, gzip or JSON decoding)."""
    def __init__(self, admin_level: Optional[int], message: str):
        self.admin_level = admin_level
        level = f"admin level {admin_level}" if admin_level is not None else "boundary data"
        super().__init__(f"failed to fetch {level}: {message}")


class WriteError(ExtractError):
    """Output file could not be written."""
    def __init__(self, path: Path | str, message: str):
        self.path = Path(path)
        super().__init__(f"failed to write {self.path}: {message}")

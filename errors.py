"""Error taxonomy for the sync pipeline.

Per-file errors (MetadataError, ReadError) are caught by the assembler and
turned into skips. DiscoveryError and WriteError abort the run.
"""

from __future__ import annotations


class SyncError(RuntimeError):
    """Base class for all pipeline errors."""


class MetadataError(SyncError):
    """Front matter is missing, malformed or lacks a required field."""


class FrontMatterParseError(MetadataError):
    """The front-matter block is not valid YAML or not a mapping."""


class ReadError(SyncError):
    """A source file could not be read or decoded."""


class WriteError(SyncError):
    """The dataset artifact could not be written."""


class DiscoveryError(SyncError):
    """The input root directory is missing or unreadable."""


class DatasetLoadError(SyncError):
    """A dataset artifact could not be read back."""

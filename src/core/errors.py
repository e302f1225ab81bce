"""Migration exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Soft data problems never raise; they become run report warnings.
"""

from __future__ import annotations


class MigrationError(Exception):
    """Base exception for all migration failures."""


class MigrationConfigError(MigrationError):
    """Raised for invalid runtime configuration."""


class MigrationIngestError(MigrationError):
    """Raised when a source export cannot be read or decoded."""


class MigrationStoreError(MigrationError):
    """Raised when a target document cannot be read, validated, or written."""


class MigrationBackupError(MigrationError):
    """Raised when the pre-write backup cannot be created."""

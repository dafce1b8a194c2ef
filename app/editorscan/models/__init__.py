"""Data models for editorscan.

This module exports the core data structures used throughout the application.
"""

from editorscan.models.diagnosis import (
    EditorErrorType,
    ErrorCategory,
    ErrorContext,
    ErrorDiagnosis,
    ErrorReport,
    ErrorSeverity,
    OperationType,
    RecoveryAction,
    RecoveryStrategy,
)
from editorscan.models.editor import EditorAppMetadata, EditorConfig, EditorType
from editorscan.models.report import DiscoveryMetadata, DiscoveryReport
from editorscan.models.tier import DiscoveryTier
from editorscan.models.validation import (
    Invalid,
    Valid,
    ValidationResult,
    Warning,
    is_valid,
    status_message,
    suggestion_text,
)

__all__ = [
    "DiscoveryMetadata",
    "DiscoveryReport",
    "DiscoveryTier",
    "EditorAppMetadata",
    "EditorConfig",
    "EditorErrorType",
    "EditorType",
    "ErrorCategory",
    "ErrorContext",
    "ErrorDiagnosis",
    "ErrorReport",
    "ErrorSeverity",
    "Invalid",
    "OperationType",
    "RecoveryAction",
    "RecoveryStrategy",
    "Valid",
    "ValidationResult",
    "Warning",
    "is_valid",
    "status_message",
    "suggestion_text",
]

"""Error diagnosis models.

Records produced by the error advisor when an editor launch fails or a
configured path does not validate. None of these are persisted.
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class OperationType(Enum):
    """What the user was doing when the failure happened."""

    FILE_OPEN = "file_open"
    PROJECT_OPEN = "project_open"
    EDITOR_VALIDATION = "editor_validation"
    DISCOVERY = "discovery"


class EditorErrorType(Enum):
    """Closed taxonomy of editor failures."""

    EXECUTABLE_NOT_FOUND = "executable_not_found"
    PERMISSION_ERROR = "permission_error"
    FILE_NOT_FOUND = "file_not_found"
    TARGET_FILE_NOT_FOUND = "target_file_not_found"
    EXECUTION_TIMEOUT = "execution_timeout"
    CONFIGURATION_ERROR = "configuration_error"
    UNKNOWN_ERROR = "unknown_error"


class ErrorCategory(Enum):
    """Broad area a failure belongs to."""

    CONFIGURATION = "configuration"
    SYSTEM = "system"
    USAGE = "usage"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """Impact of a failure on the user.

    HIGH blocks the feature, MEDIUM degrades it, LOW is cosmetic.
    """

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class RecoveryAction(Enum):
    """Actions a presentation layer can offer after a failure."""

    OPEN_SETTINGS = "open_settings"
    REFRESH_DISCOVERY = "refresh_discovery"
    RETRY_OPERATION = "retry_operation"
    FIX_PERMISSIONS = "fix_permissions"
    DOWNLOAD_EDITOR = "download_editor"
    RESET_CONFIGURATION = "reset_configuration"
    CHECK_SYSTEM_RESOURCES = "check_system_resources"
    CONTACT_SUPPORT = "contact_support"


@dataclass(frozen=True, slots=True)
class ErrorContext:
    """Circumstances of a single failure.

    Attributes:
        operation: Operation that failed.
        file_path: File the user tried to open, if any.
        project_path: Project the user tried to open, if any.
        error: The raised exception, if any.
        timestamp: Epoch milliseconds when the context was captured.
    """

    operation: OperationType
    file_path: str | None = field(default=None)
    project_path: str | None = field(default=None)
    error: BaseException | None = field(default=None)
    timestamp: int = field(default_factory=lambda: int(time.time() * 1000))


@dataclass(frozen=True, slots=True)
class ErrorDiagnosis:
    """Classification details of a failure.

    Attributes:
        category: Area the failure belongs to.
        severity: Impact on the user.
        message: Short headline.
        technical_details: Detail line built from the failing path.
        possible_causes: Likely causes, most likely first.
    """

    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    technical_details: str
    possible_causes: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "category": self.category.value,
            "severity": self.severity.value,
            "message": self.message,
            "technical_details": self.technical_details,
            "possible_causes": list(self.possible_causes),
        }


@dataclass(frozen=True, slots=True)
class RecoveryStrategy:
    """Remediation plan for a failure.

    ``can_auto_recover`` is advisory only: nothing in editorscan retries.

    Attributes:
        can_auto_recover: Whether a caller could reasonably retry unattended.
        immediate_actions: Recommended actions in priority order.
        suggestions: Human-readable remediation steps.
    """

    can_auto_recover: bool
    immediate_actions: tuple[RecoveryAction, ...]
    suggestions: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "can_auto_recover": self.can_auto_recover,
            "immediate_actions": [a.value for a in self.immediate_actions],
            "suggestions": list(self.suggestions),
        }


@dataclass(frozen=True, slots=True)
class ErrorReport:
    """A classified failure together with its diagnosis and recovery plan."""

    error_type: EditorErrorType
    diagnosis: ErrorDiagnosis
    recovery: RecoveryStrategy

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "error_type": self.error_type.value,
            "diagnosis": self.diagnosis.to_dict(),
            "recovery": self.recovery.to_dict(),
        }

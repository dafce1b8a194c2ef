"""Error classification and recovery advice.

Turns a failed editor launch, or a path that did not validate, into an
ErrorReport: a closed error type, a diagnosis explaining what probably
went wrong, and a recovery plan tailored to the host OS.

The tables here are fixed. The advisor never retries, never touches the
editor and never calls back into discovery.
"""

import logging
import os
import subprocess
from collections.abc import Callable

from editorscan.core.platform import HostOS
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
from editorscan.models.editor import EditorConfig, EditorType
from editorscan.models.validation import Invalid, ValidationResult

logger = logging.getLogger(__name__)

# Button labels offered for each action, in display order
_ACTION_LABELS: tuple[tuple[RecoveryAction, str], ...] = (
    (RecoveryAction.OPEN_SETTINGS, "Open Settings"),
    (RecoveryAction.REFRESH_DISCOVERY, "Refresh Discovery"),
    (RecoveryAction.RETRY_OPERATION, "Retry"),
)

_TIMEOUT_ERRORS = (TimeoutError, subprocess.TimeoutExpired)

_PERMISSION_FIXES: dict[HostOS, tuple[str, ...]] = {
    HostOS.MACOS: (
        "Right-click the app and select 'Open' to bypass Gatekeeper",
        "Check System Preferences > Security & Privacy",
        "Grant executable permissions: chmod +x /path/to/editor",
    ),
    HostOS.WINDOWS: (
        "Run as Administrator",
        "Check file properties and unblock if necessary",
        "Verify antivirus software isn't blocking execution",
    ),
    HostOS.LINUX: (
        "Grant executable permissions: chmod +x /path/to/editor",
        "Check file ownership and permissions",
        "Ensure the file is not mounted with noexec option",
    ),
}

_INSTALL_GUIDES: dict[HostOS, str] = {
    HostOS.MACOS: "Install {name} from the Mac App Store or official website",
    HostOS.WINDOWS: "Download {name} from the official website or Microsoft Store",
    HostOS.LINUX: "Install {name} using your package manager or from the official website",
}


class ErrorAdvisor:
    """Classifies editor failures and proposes recovery.

    Args:
        host: Host whose remediation steps apply. Defaults to the running OS.
        path_exists: Predicate used to check whether the target file of a
            FILE_OPEN still exists.

    Example:
        >>> advisor = ErrorAdvisor()
        >>> report = advisor.advise_failure(error, config, ErrorContext(OperationType.FILE_OPEN))
        >>> print(render_message(report.diagnosis, report.recovery))
    """

    def __init__(
        self,
        host: HostOS | None = None,
        path_exists: Callable[[str], bool] = os.path.exists,
    ) -> None:
        self._host = host or HostOS.current()
        self._path_exists = path_exists

    def classify(self, error: BaseException, context: ErrorContext) -> EditorErrorType:
        """Map an exception to an error type. The first matching rule wins."""
        message = str(error).lower()
        if isinstance(error, PermissionError):
            return EditorErrorType.PERMISSION_ERROR
        if "cannot run program" in message:
            return EditorErrorType.EXECUTABLE_NOT_FOUND
        if "no such file" in message:
            return EditorErrorType.FILE_NOT_FOUND
        if "access denied" in message:
            return EditorErrorType.PERMISSION_ERROR
        if "timeout" in message or isinstance(error, _TIMEOUT_ERRORS):
            return EditorErrorType.EXECUTION_TIMEOUT
        if context.operation is OperationType.FILE_OPEN and not self._path_exists(
            context.file_path or ""
        ):
            return EditorErrorType.TARGET_FILE_NOT_FOUND
        return EditorErrorType.UNKNOWN_ERROR

    def diagnose(
        self,
        error_type: EditorErrorType,
        config: EditorConfig,
        context: ErrorContext,
    ) -> ErrorDiagnosis:
        """Explain an error type in terms of the failing editor and context."""
        exe = config.executable_path
        match error_type:
            case EditorErrorType.EXECUTABLE_NOT_FOUND:
                return ErrorDiagnosis(
                    category=ErrorCategory.CONFIGURATION,
                    severity=ErrorSeverity.HIGH,
                    message="Editor executable not found",
                    technical_details=f"Cannot execute: {exe}",
                    possible_causes=(
                        "Editor is not installed",
                        "Incorrect path configuration",
                        "Editor was uninstalled or moved",
                        "PATH environment variable not set",
                    ),
                )
            case EditorErrorType.PERMISSION_ERROR:
                return ErrorDiagnosis(
                    category=ErrorCategory.SYSTEM,
                    severity=ErrorSeverity.MEDIUM,
                    message="Permission denied",
                    technical_details=f"Insufficient permissions to execute: {exe}",
                    possible_causes=(
                        "File is not executable",
                        "User lacks execution permissions",
                        "File is blocked by security software",
                        "macOS Gatekeeper restrictions",
                    ),
                )
            case EditorErrorType.FILE_NOT_FOUND:
                return ErrorDiagnosis(
                    category=ErrorCategory.CONFIGURATION,
                    severity=ErrorSeverity.HIGH,
                    message="Editor file not found",
                    technical_details=f"File does not exist: {exe}",
                    possible_causes=(
                        "Path is incorrect",
                        "Editor was uninstalled",
                        "File was moved or deleted",
                        "Network path is unavailable",
                    ),
                )
            case EditorErrorType.TARGET_FILE_NOT_FOUND:
                return ErrorDiagnosis(
                    category=ErrorCategory.USAGE,
                    severity=ErrorSeverity.LOW,
                    message="Target file not found",
                    technical_details=f"Cannot open file: {context.file_path}",
                    possible_causes=(
                        "File was deleted",
                        "File was moved",
                        "Network path is unavailable",
                        "Temporary file expired",
                    ),
                )
            case EditorErrorType.EXECUTION_TIMEOUT:
                return ErrorDiagnosis(
                    category=ErrorCategory.SYSTEM,
                    severity=ErrorSeverity.MEDIUM,
                    message="Editor execution timeout",
                    technical_details="Editor failed to start within timeout period",
                    possible_causes=(
                        "System is overloaded",
                        "Editor is taking too long to initialize",
                        "Antivirus software interference",
                        "Disk I/O issues",
                    ),
                )
            case EditorErrorType.CONFIGURATION_ERROR:
                return ErrorDiagnosis(
                    category=ErrorCategory.CONFIGURATION,
                    severity=ErrorSeverity.HIGH,
                    message="Configuration error",
                    technical_details="Invalid editor configuration",
                    possible_causes=(
                        "Missing required configuration",
                        "Invalid parameter values",
                        "Corrupted settings file",
                    ),
                )
            case EditorErrorType.UNKNOWN_ERROR:
                details = str(context.error) if context.error is not None else ""
                return ErrorDiagnosis(
                    category=ErrorCategory.UNKNOWN,
                    severity=ErrorSeverity.MEDIUM,
                    message="Unknown error occurred",
                    technical_details=details or "No additional details available",
                    possible_causes=(
                        "Unexpected system condition",
                        "Editor compatibility issue",
                        "Temporary system problem",
                    ),
                )

    def suggest_recovery(
        self,
        error_type: EditorErrorType,
        config: EditorConfig,
        context: ErrorContext,
    ) -> RecoveryStrategy:
        """Propose actions and remediation steps for an error type."""
        match error_type:
            case EditorErrorType.EXECUTABLE_NOT_FOUND | EditorErrorType.FILE_NOT_FOUND:
                return RecoveryStrategy(
                    can_auto_recover=True,
                    immediate_actions=(
                        RecoveryAction.REFRESH_DISCOVERY,
                        RecoveryAction.OPEN_SETTINGS,
                        RecoveryAction.DOWNLOAD_EDITOR,
                    ),
                    suggestions=(
                        "Use 'Refresh' to auto-discover installed editors",
                        "Manually configure the correct path",
                        f"Install {config.display_name} if not present",
                        self.installation_guide(config.id),
                    ),
                )
            case EditorErrorType.PERMISSION_ERROR:
                return RecoveryStrategy(
                    can_auto_recover=False,
                    immediate_actions=(
                        RecoveryAction.FIX_PERMISSIONS,
                        RecoveryAction.OPEN_SETTINGS,
                    ),
                    suggestions=_PERMISSION_FIXES[self._host],
                )
            case EditorErrorType.TARGET_FILE_NOT_FOUND:
                return RecoveryStrategy(
                    can_auto_recover=False,
                    immediate_actions=(RecoveryAction.RETRY_OPERATION,),
                    suggestions=(
                        "Verify the file still exists",
                        "Refresh the project view",
                        "Check if the file was moved or renamed",
                    ),
                )
            case EditorErrorType.EXECUTION_TIMEOUT:
                return RecoveryStrategy(
                    can_auto_recover=True,
                    immediate_actions=(
                        RecoveryAction.RETRY_OPERATION,
                        RecoveryAction.CHECK_SYSTEM_RESOURCES,
                    ),
                    suggestions=(
                        "Wait a moment and try again",
                        "Close unnecessary applications",
                        "Check system resources (CPU, Memory, Disk)",
                        "Temporarily disable antivirus real-time scanning",
                    ),
                )
            case EditorErrorType.CONFIGURATION_ERROR:
                return RecoveryStrategy(
                    can_auto_recover=True,
                    immediate_actions=(
                        RecoveryAction.RESET_CONFIGURATION,
                        RecoveryAction.OPEN_SETTINGS,
                    ),
                    suggestions=(
                        "Reset to default configuration",
                        "Re-run auto-discovery",
                        "Manually reconfigure editor settings",
                    ),
                )
            case EditorErrorType.UNKNOWN_ERROR:
                return RecoveryStrategy(
                    can_auto_recover=False,
                    immediate_actions=(
                        RecoveryAction.RETRY_OPERATION,
                        RecoveryAction.OPEN_SETTINGS,
                        RecoveryAction.CONTACT_SUPPORT,
                    ),
                    suggestions=(
                        "Try again in a moment",
                        "Check system logs for more details",
                        "Restart the IDE if the problem persists",
                        "Report the issue with log details",
                    ),
                )

    def installation_guide(self, editor_id: str) -> str:
        """Return a one-line, host-specific install hint for an editor."""
        editor_type = EditorType.from_id(editor_id)
        name = editor_type.display_name if editor_type is not None else editor_id
        return _INSTALL_GUIDES[self._host].format(name=name)

    def advise_failure(
        self,
        error: BaseException,
        config: EditorConfig,
        context: ErrorContext,
    ) -> ErrorReport:
        """Classify a launch failure and bundle diagnosis and recovery."""
        error_type = self.classify(error, context)
        logger.debug("Classified %r as %s", error, error_type.value)
        return ErrorReport(
            error_type=error_type,
            diagnosis=self.diagnose(error_type, config, context),
            recovery=self.suggest_recovery(error_type, config, context),
        )

    def advise_validation(
        self, result: ValidationResult, config: EditorConfig
    ) -> ErrorReport | None:
        """Build a report for an Invalid validation result.

        Valid and Warning results need no report and yield None.
        """
        if not isinstance(result, Invalid):
            return None
        return ErrorReport(
            error_type=EditorErrorType.CONFIGURATION_ERROR,
            diagnosis=ErrorDiagnosis(
                category=ErrorCategory.CONFIGURATION,
                severity=ErrorSeverity.HIGH,
                message=result.reason,
                technical_details=f"Path validation failed for {config.executable_path}",
                possible_causes=(
                    "File does not exist",
                    "Insufficient permissions",
                    "Invalid file path",
                    "Editor not installed",
                ),
            ),
            recovery=RecoveryStrategy(
                can_auto_recover=False,
                immediate_actions=(RecoveryAction.OPEN_SETTINGS, RecoveryAction.REFRESH_DISCOVERY),
                suggestions=(result.suggestion or "Please check the editor path in settings",),
            ),
        )


def render_message(diagnosis: ErrorDiagnosis, recovery: RecoveryStrategy) -> str:
    """Format a diagnosis and recovery plan as a plain-text message body."""
    lines = [diagnosis.message, ""]
    if diagnosis.technical_details:
        lines += ["Technical Details:", diagnosis.technical_details, ""]
    if diagnosis.possible_causes:
        lines.append("Possible Causes:")
        lines += [f"• {cause}" for cause in diagnosis.possible_causes]
        lines.append("")
    if recovery.suggestions:
        lines.append("Suggested Solutions:")
        lines += [f"• {suggestion}" for suggestion in recovery.suggestions]
    return "\n".join(lines).rstrip("\n")


def action_labels(recovery: RecoveryStrategy) -> list[str]:
    """Return button labels for a recovery plan, always ending in Cancel."""
    labels = [label for action, label in _ACTION_LABELS if action in recovery.immediate_actions]
    labels.append("Cancel")
    return labels

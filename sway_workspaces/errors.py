"""
Error taxonomy for sway-workspaces.

Every failure surfaces as a WorkspaceError subclass carrying a structured
code, a human-readable message and a suggested recovery action. The CLI is
the only place these are caught.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """
    Error codes for sway-workspaces.

    - 1000-1099: Input errors (mapping specs, workspace targets)
    - 1200-1299: File system errors (mapping / previous-workspace files)
    - 1400-1499: Sway IPC errors
    - 1500-1599: State errors (focus state, marks, tree shape)
    """

    # Input errors (1000-1099)
    INVALID_MAPPING_SPEC = 1000
    MISSING_TARGET = 1001

    # File system errors (1200-1299)
    FILE_NOT_FOUND = 1200
    FILE_READ_ERROR = 1201
    FILE_WRITE_ERROR = 1202

    # Sway IPC errors (1400-1499)
    SWAY_NOT_RUNNING = 1400
    SWAY_IPC_FAILED = 1401
    SWAY_COMMAND_FAILED = 1402

    # State errors (1500-1599)
    NO_FOCUSED_WORKSPACE = 1500
    NO_FOCUSED_OUTPUT = 1501
    MARK_NOT_FOUND = 1502
    UNEXPECTED_TREE = 1503


class WorkspaceError(Exception):
    """Base exception for sway-workspaces errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize error.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            suggestion: Suggested recovery action
            context: Additional context for debugging
        """
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.context = context or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to dictionary for JSON output.

        Returns:
            Error dictionary with code, message, suggestion, and context
        """
        result = {
            "code": self.code.value,
            "message": self.message
        }

        if self.suggestion:
            result["suggestion"] = self.suggestion

        if self.context:
            result["context"] = self.context

        return result


class SwayIPCError(WorkspaceError):
    """Sway IPC communication error (connect, query, subscription)."""

    def __init__(self, operation: str, reason: str, code: ErrorCode = ErrorCode.SWAY_IPC_FAILED):
        super().__init__(
            code=code,
            message=f"Sway IPC {operation} failed: {reason}",
            suggestion="Ensure Sway is running and SWAYSOCK points at its IPC socket",
            context={"operation": operation, "reason": reason}
        )


class CommandError(WorkspaceError):
    """A command was delivered but sway reported it as unsuccessful."""

    def __init__(self, command: str, reason: str):
        self.command = command
        super().__init__(
            code=ErrorCode.SWAY_COMMAND_FAILED,
            message=f"Sway rejected command '{command}': {reason}",
            suggestion="Run with --dry-run to inspect the command sequence",
            context={"command": command, "reason": reason}
        )


class NoFocusedWorkspace(WorkspaceError):
    """Sway reported no focused workspace."""

    def __init__(self):
        super().__init__(
            code=ErrorCode.NO_FOCUSED_WORKSPACE,
            message="No focused workspace exists",
            suggestion="Focus a workspace and try again"
        )


class NoFocusedOutput(WorkspaceError):
    """Sway reported no focused output."""

    def __init__(self):
        super().__init__(
            code=ErrorCode.NO_FOCUSED_OUTPUT,
            message="No focused output exists",
            suggestion="Check that at least one output is enabled"
        )


class MarkNotFound(WorkspaceError):
    """The temporary mark placed on a container vanished from the tree."""

    def __init__(self, mark: str):
        super().__init__(
            code=ErrorCode.MARK_NOT_FOUND,
            message=f"Previously set mark '{mark}' was not found in the tree",
            suggestion="The window may have been closed concurrently; retry the move",
            context={"mark": mark}
        )


class UnexpectedTree(WorkspaceError):
    """The tree does not have the expected shape."""

    def __init__(self, reason: str):
        super().__init__(
            code=ErrorCode.UNEXPECTED_TREE,
            message=f"Tree does not have the expected shape: {reason}",
            context={"reason": reason}
        )


class MappingSpecError(WorkspaceError):
    """An OUTPUT:SPEC token could not be parsed."""

    def __init__(self, token: str, reason: str):
        self.token = token
        super().__init__(
            code=ErrorCode.INVALID_MAPPING_SPEC,
            message=f"Invalid mapping '{token}': {reason}",
            suggestion="Use OUTPUT:N, OUTPUT:N,M,... or OUTPUT:A-B",
            context={"token": token, "reason": reason}
        )


class MissingTarget(WorkspaceError):
    """Neither a workspace number nor a name was supplied."""

    def __init__(self):
        super().__init__(
            code=ErrorCode.MISSING_TARGET,
            message="Either a workspace number or a workspace name must be provided"
        )


class PersistenceError(WorkspaceError):
    """Reading, writing or decoding a state file failed."""

    def __init__(self, code: ErrorCode, file_path: str, reason: str):
        verb = "write" if code == ErrorCode.FILE_WRITE_ERROR else "read"
        super().__init__(
            code=code,
            message=f"Failed to {verb} {file_path}: {reason}",
            suggestion="Check file syntax and permissions",
            context={"file_path": file_path, "reason": reason}
        )

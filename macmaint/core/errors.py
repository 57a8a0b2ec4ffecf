"""Error Hierarchy — typed, categorized exceptions for every macmaint failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Dispatch-level errors (unknown tool, invalid argument) propagate to the caller
    - ExternalCommandError never crosses a handler boundary; handlers turn it into {"error": ...}
    - to_response() produces the REST envelope; to_jsonrpc_error() the JSON-RPC one

Design Decisions:
    - Single hierarchy with MacMaintError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    EXTERNAL_COMMAND = "external_command"
    INTERNAL = "internal"
    TIMEOUT = "timeout"


# JSON-RPC 2.0 reserved codes
JSONRPC_METHOD_NOT_FOUND = -32601
JSONRPC_INVALID_PARAMS = -32602
JSONRPC_INTERNAL_ERROR = -32603


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    tool_name: str | None = None
    command: list[str] | None = None
    debug_info: dict[str, Any] | None = None


class MacMaintError(Exception):
    """Base exception for all macmaint errors."""

    jsonrpc_code = JSONRPC_INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "tool_name": self.context.tool_name,
                },
            }
        }

    def to_jsonrpc_error(self) -> dict:
        """Convert to a JSON-RPC 2.0 error object."""
        return {
            "code": self.jsonrpc_code,
            "message": self.message,
            "data": {"code": self.code, "tool_name": self.context.tool_name},
        }


# ─── Dispatch Errors (protocol-level) ───────────────────────────

class UnknownToolError(MacMaintError):
    """Tool name is not in the registry."""

    jsonrpc_code = JSONRPC_METHOD_NOT_FOUND

    def __init__(self, tool_name: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.tool_name = tool_name
        super().__init__(
            f"Unknown tool: {tool_name}",
            "UNKNOWN_TOOL", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )


class InvalidArgumentError(MacMaintError):
    """Argument failed type or enum validation against the tool's schema."""

    jsonrpc_code = JSONRPC_INVALID_PARAMS

    def __init__(
        self, message: str, field: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "INVALID_ARGUMENT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["field"] = self.field
        return response


class UnboundToolError(MacMaintError):
    """Tool is registered but has no handler — registry and dispatch out of step."""

    def __init__(self, tool_name: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.tool_name = tool_name
        super().__init__(
            f"Tool '{tool_name}' is registered but has no handler",
            "UNBOUND_TOOL", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, ctx, 500,
        )


# ─── Handler Errors (caught in-band) ────────────────────────────

class ExternalCommandError(MacMaintError):
    """External command missing, failed, timed out or produced no usable output."""

    def __init__(
        self,
        message: str,
        command: list[str] | None = None,
        timed_out: bool = False,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.command = command
        super().__init__(
            message, "EXTERNAL_COMMAND_FAILED",
            ErrorCategory.TIMEOUT if timed_out else ErrorCategory.EXTERNAL_COMMAND,
            ErrorSeverity.WARNING, ctx, 502,
        )
        self.command = command
        self.timed_out = timed_out

"""
Structured error handling for the workspace tab manager.

Tab operations are total over the registry state: unknown ids and protected
tabs turn into no-ops, not exceptions. The exceptions below are raised only
when a caller hands the manager input it cannot interpret.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from datetime import datetime
from enum import Enum


class ErrorSeverity(Enum):
    """How badly a rejected input affects the caller."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass
class ErrorContext:
    """
    What was rejected and what the tab strip looked like at the time.
    """

    error_type: str
    message: str
    timestamp: datetime = field(default_factory=datetime.now)

    # Rejected input
    operation: Optional[str] = None
    payload: Optional[Any] = None

    # Tab strip state, filled in by ErrorReporter
    active_tab_id: Optional[str] = None
    tab_count: Optional[int] = None

    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'error_type': self.error_type,
            'message': self.message,
            'timestamp': self.timestamp.isoformat(),
            'operation': self.operation,
            'payload': repr(self.payload) if self.payload is not None else None,
            'active_tab_id': self.active_tab_id,
            'tab_count': self.tab_count,
            'metadata': self.metadata,
        }


class TabManagementError(Exception):
    """
    Base class of the errors raised by the tab manager.

    Keyword arguments matching ErrorContext fields (operation, payload, ...)
    are copied onto the context.
    """

    severity: ErrorSeverity = ErrorSeverity.MEDIUM

    def __init__(self, message: str, context: Optional[ErrorContext] = None, **kwargs):
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext(error_type=type(self).__name__, message=message)
        for name, value in kwargs.items():
            if hasattr(self.context, name):
                setattr(self.context, name, value)


class InvalidOpenOptionsError(TabManagementError):
    """The options argument of open_tab has an unsupported shape."""
    severity = ErrorSeverity.HIGH


class InvalidDescriptorError(TabManagementError):
    """A tab descriptor failed validation (unknown kind, empty path, ...)."""
    severity = ErrorSeverity.HIGH


class SnapshotError(TabManagementError):
    """A persisted tab snapshot could not be read."""
    severity = ErrorSeverity.MEDIUM


class ConfigurationError(TabManagementError):
    """Configuration file missing, unreadable or invalid."""
    severity = ErrorSeverity.CRITICAL


@dataclass
class ErrorReporter:
    """
    Collects errors raised while driving a tab manager, together with the
    tab strip state they happened in.
    """

    max_errors: int = 50
    errors: List[ErrorContext] = field(default_factory=list)

    def record(self, error: Exception, manager: Any = None,
               step: Optional[Dict[str, Any]] = None) -> ErrorContext:
        """
        Record an error.

        Args:
            error: The exception that occurred
            manager: TabManager the failing call was made on
            step: Scenario step or call description that failed

        Returns:
            The stored ErrorContext
        """
        if isinstance(error, TabManagementError):
            context = error.context
        else:
            context = ErrorContext(error_type=type(error).__name__, message=str(error))

        if manager is not None:
            context.active_tab_id = manager.active_tab_id
            context.tab_count = len(manager.tabs)
        if step:
            context.operation = context.operation or step.get("op")
            context.metadata["step"] = dict(step)

        self.errors.append(context)
        if len(self.errors) > self.max_errors:
            self.errors.pop(0)
        return context

    def get_error_summary(self) -> Dict[str, Any]:
        counts: Dict[str, int] = {}
        for context in self.errors:
            counts[context.error_type] = counts.get(context.error_type, 0) + 1
        return {
            'total_errors': len(self.errors),
            'error_counts': counts,
            'recent_errors': [context.to_dict() for context in self.errors[-5:]],
        }

    def clear_errors(self) -> None:
        self.errors.clear()

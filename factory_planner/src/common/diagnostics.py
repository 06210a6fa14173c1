import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .exceptions import PlannerError

"""Unified diagnostic collection for the planning pipeline."""


class DiagnosticSeverity(Enum):
    """Severity levels for planner diagnostics."""

    DEBUG = "debug"  # Internal solver progress
    INFO = "info"  # Informational messages for users
    WARNING = "warning"  # Issues that don't prevent planning
    ERROR = "error"  # Issues that prevent a usable plan


_SEVERITY_ORDER = [
    DiagnosticSeverity.DEBUG,
    DiagnosticSeverity.INFO,
    DiagnosticSeverity.WARNING,
    DiagnosticSeverity.ERROR,
]

_LOGGING_LEVELS = {
    DiagnosticSeverity.DEBUG: logging.DEBUG,
    DiagnosticSeverity.INFO: logging.INFO,
    DiagnosticSeverity.WARNING: logging.WARNING,
    DiagnosticSeverity.ERROR: logging.ERROR,
}


@dataclass
class Diagnostic:
    """A single diagnostic message with context."""

    severity: DiagnosticSeverity
    message: str
    stage: str  # composition, placement, routing, annealing, cli


class ProgramDiagnostics:
    """Central diagnostic collection for a planning run.

    Entries below ``log_level`` are dropped. Every kept entry is also
    forwarded to the ``factory_planner.<stage>`` logger.

    Usage:
        diagnostics = ProgramDiagnostics(log_level="info")
        diagnostics.warning("3 flows unroutable", stage="annealing")
        if diagnostics.has_errors():
            print(diagnostics.format_for_user())
    """

    def __init__(self, log_level: str = "warning", raise_errors: bool = False):
        try:
            self.min_severity = DiagnosticSeverity(log_level.lower())
        except ValueError:
            raise ValueError(f"Invalid log level: {log_level}") from None
        self.raise_errors = raise_errors
        self.diagnostics: List[Diagnostic] = []
        self._error_count = 0
        self._warning_count = 0
        self.default_stage = "unknown"

    def debug(self, message: str, stage: Optional[str] = None) -> None:
        """Add a debug message (solver internals)."""
        self._add(DiagnosticSeverity.DEBUG, message, stage)

    def info(self, message: str, stage: Optional[str] = None) -> None:
        """Add an informational message."""
        self._add(DiagnosticSeverity.INFO, message, stage)

    def warning(self, message: str, stage: Optional[str] = None) -> None:
        """Add a warning (always counted, doesn't stop planning)."""
        self._warning_count += 1
        self._add(DiagnosticSeverity.WARNING, message, stage)

    def error(self, message: str, stage: Optional[str] = None) -> None:
        """Add an error; raises PlannerError when ``raise_errors`` is set."""
        self._error_count += 1
        self._add(DiagnosticSeverity.ERROR, message, stage)
        if self.raise_errors:
            raise PlannerError(message, stage=stage or self.default_stage)

    def is_enabled_for(self, severity: DiagnosticSeverity) -> bool:
        return _SEVERITY_ORDER.index(severity) >= _SEVERITY_ORDER.index(
            self.min_severity
        )

    def _add(
        self, severity: DiagnosticSeverity, message: str, stage: Optional[str]
    ) -> None:
        """Internal method to add a diagnostic."""
        if not self.is_enabled_for(severity):
            return
        diag = Diagnostic(
            severity=severity, message=message, stage=stage or self.default_stage
        )
        self.diagnostics.append(diag)
        logging.getLogger(f"factory_planner.{diag.stage}").log(
            _LOGGING_LEVELS[severity], message
        )

    def has_errors(self) -> bool:
        """Check if any errors have been recorded."""
        return self._error_count > 0

    def error_count(self) -> int:
        return self._error_count

    def warning_count(self) -> int:
        return self._warning_count

    def get_messages(
        self, min_severity: DiagnosticSeverity = DiagnosticSeverity.WARNING
    ) -> List[str]:
        """Get formatted messages at or above the specified severity level."""
        threshold = _SEVERITY_ORDER.index(min_severity)
        return [
            self._format_diagnostic(diag)
            for diag in self.diagnostics
            if _SEVERITY_ORDER.index(diag.severity) >= threshold
        ]

    def _format_diagnostic(self, diag: Diagnostic) -> str:
        # Format: SEVERITY [stage]: message
        return f"{diag.severity.value.upper()} [{diag.stage}]: {diag.message}"

    def format_for_user(self) -> str:
        """Format all kept diagnostics for user-friendly output."""
        if not self.diagnostics:
            return "No diagnostics."

        messages = self.get_messages(self.min_severity)
        summary = f"\nPlanning summary: {self._error_count} error(s), {self._warning_count} warning(s)"
        return "\n".join(messages) + summary

    def merge(self, other: "ProgramDiagnostics") -> None:
        """Merge diagnostics from another collector."""
        self.diagnostics.extend(other.diagnostics)
        self._error_count += other._error_count
        self._warning_count += other._warning_count

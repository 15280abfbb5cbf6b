"""
Structured diagnostics shared by the solver, the validator and the probe.

Domain conditions (missing source, floating parts, short circuits, ...) are
reported as `Diagnostic` values instead of exceptions. A `DiagnosticLog`
collects them, mirrors each one to a standard `logging` logger and, when the
caller injects one, to a sink callable (e.g. a UI status line).
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List
import logging


class Severity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


_LEVELS = {
    Severity.INFO: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


@dataclass(frozen=True)
class Diagnostic:
    """
    One human-readable finding.

    Attributes:
        severity: How serious the finding is.
        code: Short stable identifier (e.g. "missing-source"), meant for tests
            and for callers that branch on the kind of finding.
        message: Text shown to the user.
    """
    severity: Severity
    code: str
    message: str

    def __str__(self) -> str:
        return f"{self.severity.value}: {self.message}"


DiagnosticSink = Callable[[Diagnostic], None]


@dataclass
class DiagnosticLog:
    """
    Ordered findings of one producer.

    `limit` caps how many entries are retained (oldest dropped first); the
    logger and the sink still see every diagnostic. None keeps everything.
    """
    logger: logging.Logger
    sink: DiagnosticSink | None = None
    entries: List[Diagnostic] = field(default_factory=list)
    limit: int | None = None

    def emit(self, severity: Severity, code: str, message: str) -> Diagnostic:
        diagnostic = Diagnostic(severity, code, message)
        self.entries.append(diagnostic)
        if self.limit is not None and len(self.entries) > self.limit:
            del self.entries[:len(self.entries) - self.limit]
        self.logger.log(_LEVELS[severity], "[%s] %s", code, message)
        if self.sink is not None:
            self.sink(diagnostic)
        return diagnostic

    def info(self, code: str, message: str) -> Diagnostic:
        return self.emit(Severity.INFO, code, message)

    def warning(self, code: str, message: str) -> Diagnostic:
        return self.emit(Severity.WARNING, code, message)

    def error(self, code: str, message: str) -> Diagnostic:
        return self.emit(Severity.ERROR, code, message)

    def codes(self) -> List[str]:
        return [d.code for d in self.entries]

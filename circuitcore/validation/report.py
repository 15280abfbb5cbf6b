from __future__ import annotations
from dataclasses import dataclass, field
from typing import List
import logging
from ..diagnostics import Diagnostic, DiagnosticLog

logger = logging.getLogger(__name__)


@dataclass
class ValidationReport:
    """
    Errors and warnings collected by `validate`, in the order found.

    Errors make the circuit unusable; warnings flag suspicious but solvable
    topologies.
    """
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    log: DiagnosticLog = field(default_factory=lambda: DiagnosticLog(logger),
                               repr=False, compare=False)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    @property
    def diagnostics(self) -> List[Diagnostic]:
        return self.log.entries

    def codes(self) -> List[str]:
        return self.log.codes()

    def add_error(self, message: str, code: str = "invalid-circuit") -> None:
        self.errors.append(message)
        self.log.error(code, message)

    def add_warning(self, message: str, code: str = "suspicious-circuit") -> None:
        self.warnings.append(message)
        self.log.warning(code, message)

    def summary(self) -> str:
        if self.is_valid and not self.has_warnings:
            return "Circuit validation passed with no issues"

        lines = ["Circuit validation results:"]
        if self.errors:
            lines.append(f"{len(self.errors)} error(s):")
            lines.extend(f"  • {error}" for error in self.errors)
        if self.warnings:
            lines.append(f"{len(self.warnings)} warning(s):")
            lines.extend(f"  • {warning}" for warning in self.warnings)
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.summary()

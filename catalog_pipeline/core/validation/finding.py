"""
Validation Findings
Report entries produced by the validation engine
"""

from dataclasses import dataclass, field
from typing import List, Optional

from ..errors import SchemaViolation

ERROR = "error"
WARNING = "warning"


@dataclass(frozen=True)
class Finding:
    """One problem located in the input: severity, record index, field, message."""
    severity: str
    index: Optional[int]
    field: Optional[str]
    message: str

    @property
    def is_error(self) -> bool:
        return self.severity == ERROR

    def __str__(self) -> str:
        location = "file" if self.index is None else f"record #{self.index}"
        if self.field:
            location += f" [{self.field}]"
        return f"{self.severity.upper()}: {location}: {self.message}"


@dataclass
class ValidationReport:
    """
    Complete finding set of one validation pass.
    The run passes iff no error-severity finding is present.
    """
    findings: List[Finding] = field(default_factory=list)
    record_count: int = 0

    @property
    def errors(self) -> List[Finding]:
        return [f for f in self.findings if f.is_error]

    @property
    def warnings(self) -> List[Finding]:
        return [f for f in self.findings if not f.is_error]

    @property
    def passed(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> None:
        """Raise SchemaViolation wrapping the error findings, if any."""
        if self.errors:
            raise SchemaViolation(self.errors)

    def format_lines(self) -> List[str]:
        lines = [str(f) for f in self.findings]
        lines.append(
            f"{self.record_count} record(s) checked: "
            f"{len(self.errors)} error(s), {len(self.warnings)} warning(s)"
        )
        return lines

"""Timeline data validation helpers (library-facing)."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Pattern, Tuple


class RecordValidationError(ValueError):
    """Raised when timeline data fails validation."""


@dataclass(frozen=True)
class FieldRule:
    required: bool
    kind: type
    min_length: int = 0
    pattern: Optional[Pattern[str]] = None
    description: str = ""


FIELD_RULES: Dict[str, FieldRule] = {
    "date": FieldRule(True, str, pattern=re.compile(r"^\d{4}-\d{2}-\d{2}$"), description="date must be YYYY-MM-DD"),
    "title": FieldRule(True, str, min_length=1, description="title must not be empty"),
    "text": FieldRule(True, str, min_length=10, description="text needs at least 10 characters"),
    "modelSize": FieldRule(False, str, description="parameter count"),
    "modelType": FieldRule(False, str, description="model type"),
    "openSource": FieldRule(False, bool, description="open source flag"),
    "contextWindow": FieldRule(False, str, description="context window size"),
    "officialDoc": FieldRule(False, str, pattern=re.compile(r"^https?://.+"), description="officialDoc must be an http(s) URL"),
    "evaluation": FieldRule(False, str, description="evaluation notes"),
}

_TYPE_NAMES = {str: "string", bool: "boolean"}


@dataclass(frozen=True)
class Issue:
    record: int
    field: str
    message: str


@dataclass
class ValidationReport:
    errors: List[Issue] = field(default_factory=list)
    warnings: List[Issue] = field(default_factory=list)
    total_records: int = 0
    valid_records: int = 0
    invalid_records: int = 0

    def add_error(self, record: int, field_name: str, message: str) -> None:
        self.errors.append(Issue(record, field_name, message))

    def add_warning(self, record: int, field_name: str, message: str) -> None:
        self.warnings.append(Issue(record, field_name, message))

    def is_valid(self) -> bool:
        return not self.errors

    @property
    def stats(self) -> Dict[str, int]:
        return {
            "total_records": self.total_records,
            "valid_records": self.valid_records,
            "invalid_records": self.invalid_records,
        }

    def pass_rate(self) -> float:
        if self.total_records <= 0:
            return 0.0
        return self.valid_records / self.total_records * 100.0

    def render(self) -> str:
        lines: List[str] = ["Timeline data validation report", "=" * 50, ""]
        lines.append("Stats:")
        lines.append(f"   total records:   {self.total_records}")
        lines.append(f"   valid records:   {self.valid_records}")
        lines.append(f"   invalid records: {self.invalid_records}")
        lines.append(f"   pass rate:       {self.pass_rate():.1f}%")
        lines.append("")

        if self.errors:
            lines.append("Errors:")
            for n, e in enumerate(self.errors, start=1):
                lines.append(f"   {n}. record #{e.record + 1} - {e.field}: {e.message}")
            lines.append("")

        if self.warnings:
            lines.append("Warnings:")
            for n, w in enumerate(self.warnings, start=1):
                lines.append(f"   {n}. record #{w.record + 1} - {w.field}: {w.message}")
            lines.append("")

        if self.is_valid():
            lines.append("Result: PASS")
        else:
            lines.append("Result: FAIL")
            lines.append(f"   {len(self.errors)} error(s), {len(self.warnings)} warning(s)")
        return "\n".join(lines)


def _is_blank(v: Any) -> bool:
    return v is None or v == ""


def _validate_field(value: Any, name: str, rule: FieldRule, index: int, report: ValidationReport) -> bool:
    if _is_blank(value):
        if rule.required:
            report.add_error(index, name, f"required field missing (value: {value!r})")
            return False
        return True

    if not isinstance(value, rule.kind) or (rule.kind is not bool and isinstance(value, bool)):
        want = _TYPE_NAMES.get(rule.kind, rule.kind.__name__)
        report.add_error(index, name, f"wrong type, expected {want}, got {type(value).__name__}")
        return False

    if isinstance(value, str) and rule.min_length and len(value) < rule.min_length:
        report.add_error(index, name, f"too short, needs at least {rule.min_length} characters")
        return False

    if rule.pattern is not None and not rule.pattern.search(value):
        report.add_error(index, name, rule.description or "bad format")
        return False

    return True


def validate_record(record: Any, index: int, report: ValidationReport) -> bool:
    if not isinstance(record, Mapping):
        report.add_error(index, "record", "record must be a mapping")
        return False

    ok = True
    for name, rule in FIELD_RULES.items():
        if not _validate_field(record.get(name), name, rule, index, report):
            ok = False

    for name in record:
        if name not in FIELD_RULES:
            report.add_warning(index, str(name), "unknown field")
    return ok


def validate_records(data: Any) -> ValidationReport:
    report = ValidationReport()
    if not isinstance(data, list):
        report.add_error(0, "root", "data must be a list of records")
        return report

    report.total_records = len(data)
    for i, rec in enumerate(data):
        if validate_record(rec, i, report):
            report.valid_records += 1
        else:
            report.invalid_records += 1
    return report


def assert_valid_records(data: Any) -> None:
    report = validate_records(data)
    if not report.is_valid():
        e = report.errors[0]
        raise RecordValidationError(f"record #{e.record + 1} - {e.field}: {e.message}")


def yaml_error_position(ex: Exception) -> Optional[Tuple[int, int]]:
    """1-based (line, column) of a PyYAML error, when it carries a mark."""
    mark = getattr(ex, "problem_mark", None) or getattr(ex, "context_mark", None)
    if mark is None:
        return None
    return int(mark.line) + 1, int(mark.column) + 1


__all__ = [
    "FIELD_RULES",
    "FieldRule",
    "Issue",
    "RecordValidationError",
    "ValidationReport",
    "assert_valid_records",
    "validate_record",
    "validate_records",
    "yaml_error_position",
]

import sys
from typing import Any, Optional, Sequence, TextIO

from .check_result import CheckReport, CheckResult


def render_table(headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> str:
    """Render rows as a plain text table for terminal output."""

    table = [tuple(str(h) for h in headers)]
    table.extend(tuple("" if v is None else str(v) for v in row) for row in rows)
    widths = [max(len(row[idx]) for row in table) for idx in range(len(headers))]

    def format_row(values: Sequence[str]) -> str:
        return "  ".join(
            value.ljust(width) for value, width in zip(values, widths)
        ).rstrip()

    lines = [format_row(table[0])]
    lines.append("  ".join("=" * width for width in widths))
    for row in table[1:]:
        lines.append(format_row(row))
    return "\n".join(lines)


class Reporter:
    """Writes the human-readable verification output to a text stream."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdout
        self._sections = 0

    def _write(self, text: str = "") -> None:
        print(text, file=self.stream)

    def section(self, title: str) -> None:
        if self._sections:
            self._write()
        self._sections += 1
        self._write(f"=== {title} ===")

    def result(self, result: CheckResult) -> None:
        self._write(result.render())

    def info(self, message: str) -> None:
        self._write(message)

    def table(self, headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> None:
        if not rows:
            self._write("(none)")
            return
        self._write(render_table(headers, rows))

    def summary(self, report: CheckReport) -> None:
        self.section("RESULT")
        counts = report.counts()
        self._write(
            f"{counts['pass']} passed, {counts['warn']} warnings, {counts['fail']} failed"
        )
        if report.failed:
            self._write("One or more checks FAILED ❌ (see details above)")
        else:
            self._write("All critical checks PASSED ✅")

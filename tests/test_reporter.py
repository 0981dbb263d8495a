from __future__ import annotations

from check_engine import CheckReport, CheckResult, CheckStatus, Reporter
from check_engine.reporter import render_table


def test_render_table_aligns_columns() -> None:
    table = render_table(["Name", "Port"], [("alb", 80), ("longer-name", None)])

    assert table.splitlines() == [
        "Name         Port",
        "===========  ====",
        "alb          80",
        "longer-name",
    ]


def test_sections_are_separated_by_blank_line(stream) -> None:
    reporter = Reporter(stream)
    reporter.section("First")
    reporter.info("line")
    reporter.section("Second")

    assert stream.getvalue() == "=== First ===\nline\n\n=== Second ===\n"


def test_empty_table_prints_placeholder(stream) -> None:
    Reporter(stream).table(["A"], [])

    assert stream.getvalue() == "(none)\n"


def test_result_lines_carry_status_glyph(stream) -> None:
    reporter = Reporter(stream)
    reporter.result(CheckResult(CheckStatus.PASS, "ok"))
    reporter.result(CheckResult(CheckStatus.WARN, "hmm"))
    reporter.result(CheckResult(CheckStatus.FAIL, "bad"))

    assert stream.getvalue().splitlines() == ["✅  ok", "⚠️   hmm", "❌  bad"]


def test_summary_for_failed_report(stream) -> None:
    report = CheckReport()
    report.add(CheckResult(CheckStatus.PASS, "ok"))
    report.add(CheckResult(CheckStatus.FAIL, "bad"))

    Reporter(stream).summary(report)

    assert stream.getvalue().splitlines() == [
        "=== RESULT ===",
        "1 passed, 0 warnings, 1 failed",
        "One or more checks FAILED ❌ (see details above)",
    ]
    assert report.exit_code == 1


def test_summary_with_only_warnings_passes(stream) -> None:
    report = CheckReport()
    report.add(CheckResult(CheckStatus.WARN, "hmm"))

    Reporter(stream).summary(report)

    assert "All critical checks PASSED ✅" in stream.getvalue()
    assert report.exit_code == 0

from __future__ import annotations

import io

import pytest

from cli_parser import CliParser
from constants import CHECKS
from main import main

from .conftest import RecordingProbe
from .fakes import FakeSession, build_healthy_cloud, client_error

ENV_VARS = ("REGION", "PREFIX", "AWS_PROFILE", "APP_SG_NAME", "PUB_PATTERN", "APP_PATTERN", "DB_PATTERN")


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)


class SessionFactory:
    def __init__(self, cloud):
        self.cloud = cloud
        self.calls = []

    def __call__(self, region, profile):
        self.calls.append((region, profile))
        return FakeSession(self.cloud)


def _run(argv, cloud=None):
    stream = io.StringIO()
    factory = SessionFactory(cloud or build_healthy_cloud())
    code = main(argv, stream=stream, session_factory=factory, probe_fn=RecordingProbe())
    return code, stream.getvalue(), factory


@pytest.mark.parametrize(
    "selected, expected",
    [
        (None, ["network"]),
        (["rds", "network"], ["network", "rds"]),
        (["alb", "alb"], ["alb"]),
        (["ecs", "all"], list(CHECKS)),
    ],
)
def test_expand_checks(selected, expected) -> None:
    assert CliParser.expand_checks(selected) == expected


def test_parse_arguments() -> None:
    args = CliParser.parse_arguments(
        ["-c", "alb", "--check", "rds", "--prefix", "demo", "--max-workers", "3", "--log-level", "debug"]
    )

    assert args.checks == ["alb", "rds"]
    assert args.log_level == "DEBUG"
    assert CliParser.config_overrides(args) == {
        "region": None,
        "prefix": "demo",
        "profile": None,
        "max_workers": 3,
    }


def test_unknown_check_is_rejected() -> None:
    with pytest.raises(SystemExit):
        CliParser.parse_arguments(["--check", "s3"])


def test_healthy_network_run_exits_zero() -> None:
    code, output, factory = _run(["--region", "us-west-2", "--profile", "lab"])

    assert code == 0
    assert factory.calls == [("us-west-2", "lab")]
    assert "=== VPC & IGW ===" in output
    assert output.rstrip().endswith("All critical checks PASSED ✅")


def test_all_checks_run_in_order() -> None:
    code, output, _ = _run(["--check", "all"])

    assert code == 0
    positions = [
        output.index(title)
        for title in (
            "=== VPC & IGW ===",
            "=== Application Load Balancer ===",
            "=== ECS service ===",
            "=== RDS instance ===",
            "=== API Gateway (HTTP APIs via apigatewayv2) ===",
            "=== Inventory (prefix 'crudapp') ===",
            "=== RESULT ===",
        )
    ]
    assert positions == sorted(positions)


def test_failure_exits_one() -> None:
    cloud = build_healthy_cloud()
    cloud.db_instances[0]["PubliclyAccessible"] = True

    code, output, _ = _run(["--check", "rds"], cloud)

    assert code == 1
    assert "❌  RDS should not be publicly accessible" in output
    assert "One or more checks FAILED ❌ (see details above)" in output


def test_api_error_is_reported_and_fails() -> None:
    cloud = build_healthy_cloud()
    cloud.errors["describe_vpcs"] = client_error("DescribeVpcs")

    code, output, _ = _run(["--check", "network", "--check", "rds"], cloud)

    assert code == 1
    assert "AWS API call failed" in output
    assert "=== RDS instance ===" not in output


def test_summary_counts_results_printed_before_api_error() -> None:
    cloud = build_healthy_cloud()
    cloud.internet_gateways = []
    cloud.errors["describe_load_balancers"] = client_error("DescribeLoadBalancers")

    code, output, _ = _run([], cloud)

    lines = output.splitlines()
    passes = sum(line.startswith("✅") for line in lines)
    failures = sum(line.startswith("❌") for line in lines)
    assert code == 1
    assert passes == 11
    assert failures == 2
    assert f"{passes} passed, 0 warnings, {failures} failed" in lines


def test_prefix_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("PREFIX", "other")

    code, output, _ = _run([])

    assert code == 1
    assert "No VPC found for prefix 'other'." in output


def test_bad_config_file_exits_one(tmp_path) -> None:
    path = tmp_path / "bad.yml"
    path.write_text("nonsense_key: 1\n")

    code, output, factory = _run(["--config", str(path)])

    assert code == 1
    assert "Error: Unknown configuration key: nonsense_key" in output
    assert factory.calls == []


def test_missing_config_file_exits_one(tmp_path) -> None:
    code, output, _ = _run(["--config", str(tmp_path / "absent.yml")])

    assert code == 1
    assert output.startswith("Error: Configuration file not found")


def test_invalid_log_pattern_exits_one(tmp_path) -> None:
    path = tmp_path / "bad-pattern.yml"
    path.write_text('log_error_pattern: "alembic|[unclosed"\n')

    code, output, factory = _run(["--check", "ecs", "--config", str(path)])

    assert code == 1
    assert output.startswith("Error: Invalid log_error_pattern")
    assert factory.calls == []

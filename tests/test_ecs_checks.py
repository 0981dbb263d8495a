from __future__ import annotations

from check_engine import CheckStatus, EcsVerifier

from .fakes import CLUSTER_ARN, TASKDEF_ARN, TG_ARN


def _run(config, scanner, reporter):
    return EcsVerifier(config, scanner, reporter).run()


def _service(cloud):
    return cloud.services[CLUSTER_ARN][0]


def test_healthy_service(config, scanner, reporter, stream) -> None:
    report = _run(config, scanner, reporter)

    assert not report.failed
    assert report.by_status(CheckStatus.WARN) == []
    output = stream.getvalue()
    assert f"Cluster: {CLUSTER_ARN}" in output
    rows = [line.split() for line in output.splitlines()]
    assert ["ACTIVE", "2", "2", "0", "FARGATE"] in rows
    assert ["DATABASE_URL", "postgresql://crud@db:5432/crud"] in rows
    assert "Log group: /ecs/crudapp" in output
    assert "Running upgrade" in output
    assert "Container:    app:8000" in output
    assert "subnet-app-a subnet-app-b" in output


def test_falls_back_to_first_cluster(config, scanner, reporter, cloud) -> None:
    other = "arn:aws:ecs:us-east-1:123456789012:cluster/shared"
    cloud.clusters = [other]
    cloud.services = {other: cloud.services[CLUSTER_ARN]}

    report = _run(config, scanner, reporter)

    assert not report.failed


def test_no_cluster_fails(config, scanner, reporter, cloud) -> None:
    cloud.clusters = []

    report = _run(config, scanner, reporter)

    assert [r.message for r in report.results] == ["No ECS cluster found"]


def test_public_ip_is_warning(config, scanner, reporter, cloud) -> None:
    _service(cloud)["networkConfiguration"]["awsvpcConfiguration"]["assignPublicIp"] = "ENABLED"

    report = _run(config, scanner, reporter)

    assert [r.message for r in report.by_status(CheckStatus.WARN)] == [
        "assignPublicIp is 'ENABLED' (expected DISABLED)"
    ]
    assert not report.failed


def test_missing_task_definition_fails_and_skips_log_scan(config, scanner, reporter, cloud) -> None:
    _service(cloud)["taskDefinition"] = ""

    report = _run(config, scanner, reporter)

    assert [r.message for r in report.by_status(CheckStatus.FAIL)] == ["No task definition attached"]
    assert "filter_log_events" not in cloud.calls
    assert "awslogs not configured in task definition (skipping log scan)" in [
        r.message for r in report.by_status(CheckStatus.WARN)
    ]


def test_no_recent_errors(config, scanner, reporter, cloud, stream) -> None:
    cloud.log_events["/ecs/crudapp"] = cloud.log_events["/ecs/crudapp"][1:]

    _run(config, scanner, reporter)

    assert "(no obvious DB/migration errors)" in stream.getvalue()


def test_old_log_events_are_ignored(config, scanner, reporter, cloud, stream) -> None:
    cloud.log_events["/ecs/crudapp"] = [{"timestamp": 0, "message": "OperationalError: db down"}]

    _run(config, scanner, reporter)

    assert "OperationalError" not in stream.getvalue()


def test_without_load_balancer_attachment_warns(config, scanner, reporter, cloud) -> None:
    _service(cloud)["loadBalancers"] = []
    cloud.task_definitions[TASKDEF_ARN]["containerDefinitions"][0].pop("logConfiguration")

    report = _run(config, scanner, reporter)

    assert [r.message for r in report.by_status(CheckStatus.WARN)] == [
        "awslogs not configured in task definition (skipping log scan)",
        "Service has no load balancer attachment",
    ]


def test_unhealthy_attached_targets_fail(config, scanner, reporter, cloud) -> None:
    cloud.target_health[TG_ARN] = ["unhealthy"]

    report = _run(config, scanner, reporter)

    assert [r.message for r in report.by_status(CheckStatus.FAIL)] == ["Targets NOT healthy: unhealthy"]

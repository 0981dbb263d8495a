from __future__ import annotations

import pytest

from check_engine import ApiGatewayVerifier, InventoryVerifier

from .conftest import RecordingProbe


def test_http_apis_are_listed_and_probed(config, scanner, reporter, stream) -> None:
    endpoint = "https://a1b2c3.execute-api.us-east-1.amazonaws.com"
    probe = RecordingProbe({f"{endpoint}/health": 503})

    report = ApiGatewayVerifier(config, scanner, reporter, probe).run()

    assert report.results == []
    assert report.exit_code == 0
    output = stream.getvalue()
    assert f"API: crudapp-http  URL: {endpoint}" in output
    assert "/health → 503" in output


def test_no_http_apis(config, scanner, reporter, cloud, stream) -> None:
    cloud.http_apis = []
    probe = RecordingProbe()

    ApiGatewayVerifier(config, scanner, reporter, probe).run()

    assert "No HTTP APIs found (apigatewayv2)" in stream.getvalue()
    assert probe.calls == []


def test_inventory_lists_prefixed_resources(config, scanner, reporter, stream) -> None:
    report = InventoryVerifier(config, scanner, reporter).run()

    assert report.results == []
    rows = [line.split()[:2] for line in stream.getvalue().splitlines() if line.strip()]
    assert ["VPC", "crudapp-vpc"] in rows
    assert ["Subnet", "crudapp-db-subnet-private-b"] in rows
    assert ["ALB", "crudapp-alb"] in rows
    assert ["RDS", "crudapp-db"] in rows
    assert ["Log", "Group"] in rows


def test_scanner_rejects_unknown_service(scanner) -> None:
    with pytest.raises(ValueError):
        scanner.plugin("s3")

from __future__ import annotations

import pytest

from check_engine.route_classifier import (
    RouteClassification,
    RouteTarget,
    SubnetRouteResolver,
    classify_route_table,
)
from resource_discovery.resource_plugins.resource import RouteTable


def _table(*routes):
    return RouteTable(id="rtb-1", routes=[{"DestinationCidrBlock": "10.0.0.0/16", "GatewayId": "local"}, *routes])


def test_internet_gateway_default_route() -> None:
    route = classify_route_table(_table({"DestinationCidrBlock": "0.0.0.0/0", "GatewayId": "igw-123"}))

    assert route == RouteClassification(RouteTarget.INTERNET_GATEWAY, "igw-123", "rtb-1")


def test_nat_gateway_default_route() -> None:
    route = classify_route_table(_table({"DestinationCidrBlock": "0.0.0.0/0", "NatGatewayId": "nat-9"}))

    assert route.target is RouteTarget.NAT_GATEWAY
    assert route.gateway_id == "nat-9"


def test_no_default_route_is_none() -> None:
    route = classify_route_table(_table())

    assert route.target is RouteTarget.NONE
    assert route.gateway_id is None
    assert str(route) == "NONE none"


@pytest.mark.parametrize(
    "route, expected_target",
    [
        ({"EgressOnlyInternetGatewayId": "eigw-1"}, "eigw-1"),
        ({"NetworkInterfaceId": "eni-1"}, "eni-1"),
        ({"TransitGatewayId": "tgw-1"}, "tgw-1"),
        ({"GatewayId": "vgw-1"}, "vgw-1"),
    ],
)
def test_other_targets(route, expected_target) -> None:
    classification = classify_route_table(_table({"DestinationCidrBlock": "0.0.0.0/0", **route}))

    assert classification.target is RouteTarget.OTHER
    assert classification.gateway_id == expected_target


def test_missing_route_table_is_other_without_gateway() -> None:
    route = classify_route_table(None)

    assert route.target is RouteTarget.OTHER
    assert str(route) == "OTHER none"


def test_ipv6_default_route_is_ignored() -> None:
    route = classify_route_table(
        _table({"DestinationIpv6CidrBlock": "::/0", "EgressOnlyInternetGatewayId": "eigw-1"})
    )

    assert route.target is RouteTarget.NONE


def test_resolver_falls_back_to_main_route_table(scanner, cloud) -> None:
    # drop the explicit association of the public subnet b
    public = cloud.route_table("rtb-public")
    public["Associations"] = [a for a in public["Associations"] if a.get("SubnetId") != "subnet-pub-b"]
    resolver = SubnetRouteResolver(scanner.plugin("ec2"))

    route = resolver.classify("subnet-pub-b")

    assert route.target is RouteTarget.NONE
    assert route.route_table_id == "rtb-main"


def test_resolver_keeps_sorted_order_with_thread_pool(scanner) -> None:
    resolver = SubnetRouteResolver(scanner.plugin("ec2"), max_workers=4)

    results = resolver.classify_many({"subnet-db-b", "subnet-pub-a", "subnet-app-b", "subnet-app-a"})

    assert [subnet_id for subnet_id, _ in results] == [
        "subnet-app-a",
        "subnet-app-b",
        "subnet-db-b",
        "subnet-pub-a",
    ]
    assert [route.target for _, route in results] == [
        RouteTarget.NAT_GATEWAY,
        RouteTarget.NAT_GATEWAY,
        RouteTarget.NONE,
        RouteTarget.INTERNET_GATEWAY,
    ]


def test_resolver_caches_subnets(scanner, cloud) -> None:
    resolver = SubnetRouteResolver(scanner.plugin("ec2"))

    first = resolver.get_subnet("subnet-app-a")
    second = resolver.get_subnet("subnet-app-a")

    assert first is second
    assert cloud.calls.count("describe_subnets") == 1

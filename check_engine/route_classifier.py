"""Default-route classification for subnets."""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from threading import Lock
from typing import Dict, Iterable, List, Optional, Tuple

from constants import DEFAULT_ROUTE_CIDR
from resource_discovery.resource_plugins.resource import RouteTable, Subnet

# Route fields that can carry a non-IGW/NAT default-route target
OTHER_TARGET_KEYS = (
    "GatewayId",
    "EgressOnlyInternetGatewayId",
    "NetworkInterfaceId",
    "TransitGatewayId",
    "VpcPeeringConnectionId",
    "InstanceId",
    "LocalGatewayId",
    "CarrierGatewayId",
)


class RouteTarget(str, Enum):
    INTERNET_GATEWAY = "IGW"
    NAT_GATEWAY = "NAT"
    NONE = "NONE"
    OTHER = "OTHER"


@dataclass(frozen=True)
class RouteClassification:
    target: RouteTarget
    gateway_id: Optional[str] = None
    route_table_id: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.target.value} {self.gateway_id or 'none'}"


def find_default_route(routes: Iterable[Dict]) -> Optional[Dict]:
    return next(
        (r for r in routes if r.get("DestinationCidrBlock") == DEFAULT_ROUTE_CIDR),
        None,
    )


def classify_route_table(route_table: Optional[RouteTable]) -> RouteClassification:
    """Classify where a route table sends 0.0.0.0/0.

    A missing route table classifies as OTHER with no gateway: the subnet's
    routing could not be determined, so it is neither compliant public, app
    nor db routing.
    """
    if route_table is None:
        return RouteClassification(RouteTarget.OTHER)

    route = find_default_route(route_table.routes)
    if route is None:
        return RouteClassification(RouteTarget.NONE, route_table_id=route_table.id)

    gateway_id = route.get("GatewayId") or ""
    nat_gateway_id = route.get("NatGatewayId") or ""
    if gateway_id.startswith("igw-"):
        return RouteClassification(
            RouteTarget.INTERNET_GATEWAY, gateway_id, route_table.id
        )
    if nat_gateway_id.startswith("nat-"):
        return RouteClassification(
            RouteTarget.NAT_GATEWAY, nat_gateway_id, route_table.id
        )

    target = next((route[key] for key in OTHER_TARGET_KEYS if route.get(key)), None)
    return RouteClassification(RouteTarget.OTHER, target, route_table.id)


class SubnetRouteResolver:
    """Looks up a subnet's effective route table and classifies its default route.

    Subnets without an explicit route table association use the VPC's main
    route table. Subnet records are cached so AZ lookups reuse earlier
    describe-calls; the cache is shared across worker threads.
    """

    def __init__(self, ec2_plugin, max_workers: int = 1):
        self.ec2 = ec2_plugin
        self.max_workers = max(1, max_workers)
        self._subnets: Dict[str, Subnet] = {}
        self._lock = Lock()

    def remember(self, subnets: Iterable[Subnet]) -> None:
        with self._lock:
            for subnet in subnets:
                self._subnets[subnet.id] = subnet

    def get_subnet(self, subnet_id: str) -> Optional[Subnet]:
        with self._lock:
            cached = self._subnets.get(subnet_id)
        if cached is not None:
            return cached
        subnet = self.ec2.get_subnet(subnet_id)
        if subnet is not None:
            self.remember([subnet])
        return subnet

    def route_table_for(self, subnet_id: str) -> Optional[RouteTable]:
        table = self.ec2.get_route_table_for_subnet(subnet_id)
        if table is not None:
            return table
        subnet = self.get_subnet(subnet_id)
        if subnet is None or not subnet.vpc_id:
            return None
        return self.ec2.get_main_route_table(subnet.vpc_id)

    def classify(self, subnet_id: str) -> RouteClassification:
        return classify_route_table(self.route_table_for(subnet_id))

    def classify_many(
        self, subnet_ids: Iterable[str]
    ) -> List[Tuple[str, RouteClassification]]:
        """Classify subnets in sorted id order, fanning out when max_workers > 1."""
        ordered = sorted(subnet_ids)
        if self.max_workers > 1 and len(ordered) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                classifications = list(executor.map(self.classify, ordered))
        else:
            classifications = [self.classify(subnet_id) for subnet_id in ordered]
        return list(zip(ordered, classifications))

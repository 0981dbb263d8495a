import logging
from typing import Dict, List, Optional

from .base_plugin import BaseResourcePlugin
from .resource import NatGateway, Resource, RouteTable, SecurityGroup, Subnet, Vpc

logger = logging.getLogger(__name__)


def _filter(name: str, *values: str) -> Dict:
    return {"Name": name, "Values": list(values)}


class EC2Plugin(BaseResourcePlugin):
    """Plugin for VPC networking lookups: VPCs, gateways, subnets, route tables, security groups."""

    service_name = "ec2"

    def _to_subnet(self, subnet: dict) -> Subnet:
        return Subnet(
            id=subnet["SubnetId"],
            availability_zone=subnet.get("AvailabilityZone", ""),
            name=self._get_tag_value(subnet.get("Tags", []), "Name", "") or "",
            vpc_id=subnet.get("VpcId", ""),
        )

    # ---- VPC & gateways ----
    def find_vpc(self, prefix: str) -> Optional[Vpc]:
        """Return the first VPC whose Name tag contains the prefix."""
        vpcs = self._paginate(
            "describe_vpcs", "Vpcs", Filters=[_filter("tag:Name", f"*{prefix}*")]
        )
        if not vpcs:
            logger.info(f"No VPC tagged with '*{prefix}*'")
            return None
        vpc = vpcs[0]
        return Vpc(
            id=vpc["VpcId"],
            name=self._get_tag_value(vpc.get("Tags", []), "Name", "") or "",
            cidr_block=vpc.get("CidrBlock", ""),
        )

    def find_internet_gateway(self, vpc_id: str) -> Optional[str]:
        gateways = self._paginate(
            "describe_internet_gateways",
            "InternetGateways",
            Filters=[_filter("attachment.vpc-id", vpc_id)],
        )
        return gateways[0]["InternetGatewayId"] if gateways else None

    # ---- Subnets ----
    def find_subnets(self, vpc_id: str, name_pattern: str) -> List[Subnet]:
        """Subnets in the VPC whose Name tag matches the wildcard pattern, sorted by id."""
        subnets = self._paginate(
            "describe_subnets",
            "Subnets",
            Filters=[_filter("vpc-id", vpc_id), _filter("tag:Name", name_pattern)],
        )
        return sorted((self._to_subnet(s) for s in subnets), key=lambda s: s.id)

    def get_subnet(self, subnet_id: str) -> Optional[Subnet]:
        subnets = self._call("describe_subnets", SubnetIds=[subnet_id]).get("Subnets", [])
        return self._to_subnet(subnets[0]) if subnets else None

    # ---- Route tables ----
    def _to_route_table(self, table: dict) -> RouteTable:
        return RouteTable(
            id=table["RouteTableId"],
            routes=table.get("Routes", []),
            main=any(a.get("Main") for a in table.get("Associations", [])),
        )

    def get_route_table_for_subnet(self, subnet_id: str) -> Optional[RouteTable]:
        """Route table explicitly associated with the subnet, if any."""
        tables = self._paginate(
            "describe_route_tables",
            "RouteTables",
            Filters=[_filter("association.subnet-id", subnet_id)],
        )
        return self._to_route_table(tables[0]) if tables else None

    def get_main_route_table(self, vpc_id: str) -> Optional[RouteTable]:
        tables = self._paginate(
            "describe_route_tables",
            "RouteTables",
            Filters=[_filter("vpc-id", vpc_id), _filter("association.main", "true")],
        )
        return self._to_route_table(tables[0]) if tables else None

    # ---- NAT gateways ----
    def _to_nat_gateway(self, nat: dict) -> NatGateway:
        return NatGateway(
            id=nat["NatGatewayId"],
            subnet_id=nat.get("SubnetId", ""),
            state=nat.get("State", ""),
        )

    def get_nat_gateway(self, nat_gateway_id: str) -> Optional[NatGateway]:
        nats = self._call(
            "describe_nat_gateways", NatGatewayIds=[nat_gateway_id]
        ).get("NatGateways", [])
        return self._to_nat_gateway(nats[0]) if nats else None

    def list_nat_gateways(self, vpc_id: str, state: Optional[str] = None) -> List[NatGateway]:
        # describe_nat_gateways takes Filter, not Filters
        nats = self._paginate(
            "describe_nat_gateways", "NatGateways", Filter=[_filter("vpc-id", vpc_id)]
        )
        return [
            self._to_nat_gateway(nat)
            for nat in nats
            if state is None or nat.get("State") == state
        ]

    # ---- Security groups ----
    def _to_security_group(self, group: dict) -> SecurityGroup:
        return SecurityGroup(
            id=group["GroupId"],
            name=group.get("GroupName", ""),
            ip_permissions=group.get("IpPermissions", []),
        )

    def find_security_group_by_name(self, group_name: str) -> Optional[SecurityGroup]:
        groups = self._paginate(
            "describe_security_groups",
            "SecurityGroups",
            Filters=[_filter("group-name", group_name)],
        )
        return self._to_security_group(groups[0]) if groups else None

    def get_security_group(self, group_id: str) -> Optional[SecurityGroup]:
        groups = self._call("describe_security_groups", GroupIds=[group_id]).get(
            "SecurityGroups", []
        )
        return self._to_security_group(groups[0]) if groups else None

    def discover_managed_resources(
        self, filter: Optional[str] = None
    ) -> List[Resource]:
        """Discover the VPC matching the prefix and the subnets inside it."""
        vpc = self.find_vpc(filter or "")
        if vpc is None:
            return []

        resources = [Resource(type="VPC", name=vpc.name, id=vpc.id)]
        for subnet in self.find_subnets(vpc.id, "*"):
            resources.append(
                Resource(
                    type="Subnet",
                    name=subnet.name or "Unnamed",
                    id=subnet.id,
                    related_resources=[vpc.id, subnet.availability_zone],
                )
            )
        return resources

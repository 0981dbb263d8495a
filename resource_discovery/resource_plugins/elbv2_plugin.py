import logging
from typing import List, Optional

from .base_plugin import BaseResourcePlugin
from .resource import LoadBalancer, Resource, TargetGroup

logger = logging.getLogger(__name__)


class ELBV2Plugin(BaseResourcePlugin):
    """Plugin for Application Load Balancers, their listeners and target groups."""

    service_name = "elbv2"

    def _to_load_balancer(self, lb: dict) -> LoadBalancer:
        return LoadBalancer(
            arn=lb["LoadBalancerArn"],
            name=lb.get("LoadBalancerName", ""),
            scheme=lb.get("Scheme", ""),
            dns_name=lb.get("DNSName", ""),
            vpc_id=lb.get("VpcId", ""),
            subnet_ids=[
                az["SubnetId"]
                for az in lb.get("AvailabilityZones", [])
                if az.get("SubnetId")
            ],
        )

    def list_load_balancers(self) -> List[LoadBalancer]:
        return [
            self._to_load_balancer(lb)
            for lb in self._paginate("describe_load_balancers", "LoadBalancers")
        ]

    def find_load_balancer_in_vpc(
        self, vpc_id: str, scheme: str = "internet-facing"
    ) -> Optional[LoadBalancer]:
        return next(
            (
                lb
                for lb in self.list_load_balancers()
                if lb.vpc_id == vpc_id and lb.scheme == scheme
            ),
            None,
        )

    def find_load_balancer_by_name(self, name_fragment: str) -> Optional[LoadBalancer]:
        return next(
            (lb for lb in self.list_load_balancers() if name_fragment in lb.name),
            None,
        )

    def get_listener_ports(self, load_balancer_arn: str) -> List[int]:
        listeners = self._paginate(
            "describe_listeners", "Listeners", LoadBalancerArn=load_balancer_arn
        )
        return sorted(listener["Port"] for listener in listeners if "Port" in listener)

    def get_target_groups(self, load_balancer_arn: str) -> List[TargetGroup]:
        groups = self._paginate(
            "describe_target_groups", "TargetGroups", LoadBalancerArn=load_balancer_arn
        )
        return [
            TargetGroup(
                arn=tg["TargetGroupArn"],
                name=tg.get("TargetGroupName", ""),
                port=tg.get("Port"),
            )
            for tg in groups
        ]

    def get_target_health_states(self, target_group_arn: str) -> List[str]:
        """Health state of every registered target, in API order."""
        descriptions = self._call(
            "describe_target_health", TargetGroupArn=target_group_arn
        ).get("TargetHealthDescriptions", [])
        return [d.get("TargetHealth", {}).get("State", "unknown") for d in descriptions]

    def discover_managed_resources(
        self, filter: Optional[str] = None
    ) -> List[Resource]:
        """Discover load balancers whose name contains the filter, with their target groups."""
        resources = []
        for lb in self.list_load_balancers():
            if filter and filter not in lb.name:
                continue
            resources.append(
                Resource(
                    type="ALB",
                    name=lb.name,
                    id=lb.arn,
                    related_resources=[tg.name for tg in self.get_target_groups(lb.arn)],
                )
            )
        return resources

"""Network topology verification: public ALB -> private app (via NAT) -> private DB."""

import logging
from typing import Dict, Optional, Set

from constants import INTERNET_FACING_SCHEME, NAT_AVAILABLE_STATE, PUBLIC_IP_DISABLED
from .base_verifier import BaseVerifier
from .check_result import CheckReport, FailureCategory
from .route_classifier import RouteClassification, RouteTarget, SubnetRouteResolver

logger = logging.getLogger(__name__)

PUBLIC = "public"
APP = "app"
DB = "db"


class TopologyVerifier(BaseVerifier):
    """Validates VPC, subnets, routing, NAT, ALB and ECS placement for a 3-tier app."""

    name = "network"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.ec2 = self.scanner.plugin("ec2")
        self.routes = SubnetRouteResolver(self.ec2, self.config.max_workers)
        self.subnet_groups: Dict[str, Set[str]] = {}

    # ---- Resolution ----
    def resolve_vpc(self, prefix: str) -> Optional[str]:
        vpc = self.ec2.find_vpc(prefix)
        if vpc is None:
            self.fail(
                f"No VPC found for prefix '{prefix}'.",
                FailureCategory.RESOURCE_NOT_FOUND,
            )
            return None
        self.passed(f"VPC: {vpc.id}")
        return vpc.id

    def check_internet_gateway(self, vpc_id: str) -> None:
        igw = self.ec2.find_internet_gateway(vpc_id)
        if igw is None:
            self.fail("No Internet Gateway attached.", FailureCategory.RESOURCE_NOT_FOUND)
        else:
            self.passed(f"IGW: {igw}")

    def resolve_subnets(self, vpc_id: str, group: str, pattern: str) -> Set[str]:
        subnets = self.ec2.find_subnets(vpc_id, pattern)
        self.routes.remember(subnets)
        subnet_ids = {subnet.id for subnet in subnets}
        self.subnet_groups[group] = subnet_ids

        if not subnet_ids:
            self.fail(
                f"No {group.upper()} subnets matched {pattern}",
                FailureCategory.RESOURCE_NOT_FOUND,
            )
        else:
            self.passed(f"{group.capitalize()}: {' '.join(sorted(subnet_ids))}")
        return subnet_ids

    def classify_default_route(self, subnet_id: str) -> RouteClassification:
        return self.routes.classify(subnet_id)

    # ---- Subnet routing ----
    def check_public_subnets(self, subnet_ids: Set[str]) -> None:
        for subnet_id, route in self.routes.classify_many(subnet_ids):
            if route.target is RouteTarget.INTERNET_GATEWAY:
                self.passed(f"Public {subnet_id} → {route.gateway_id}")
            else:
                self.fail(
                    f"Public {subnet_id} default route is not IGW (got {route})",
                    FailureCategory.MISCONFIGURED_ROUTE,
                )

    def check_app_subnets(self, subnet_ids: Set[str]) -> None:
        for subnet_id, route in self.routes.classify_many(subnet_ids):
            if route.target is not RouteTarget.NAT_GATEWAY:
                self.fail(
                    f"App {subnet_id} default route is not NAT (got {route})",
                    FailureCategory.MISCONFIGURED_ROUTE,
                )
                continue
            self._check_nat_zone(subnet_id, route.gateway_id)

    def _check_nat_zone(self, subnet_id: str, nat_gateway_id: str) -> None:
        subnet = self.routes.get_subnet(subnet_id)
        subnet_az = subnet.availability_zone if subnet else "unknown"

        nat = self.ec2.get_nat_gateway(nat_gateway_id)
        nat_subnet = self.routes.get_subnet(nat.subnet_id) if nat else None
        nat_az = nat_subnet.availability_zone if nat_subnet else "unknown"

        if subnet and nat_subnet and subnet_az == nat_az:
            self.passed(f"App {subnet_id} → {nat_gateway_id} (AZ OK: {subnet_az})")
        else:
            self.warn(
                f"App {subnet_id} → {nat_gateway_id} but NAT in {nat_az} (subnet AZ={subnet_az})",
                FailureCategory.PLACEMENT_VIOLATION,
            )

    def check_db_subnets(self, subnet_ids: Set[str]) -> None:
        for subnet_id, route in self.routes.classify_many(subnet_ids):
            if route.target is RouteTarget.NONE:
                self.passed(f"DB {subnet_id} has no internet route")
            else:
                self.fail(
                    f"DB {subnet_id} has default route ({route})",
                    FailureCategory.MISCONFIGURED_ROUTE,
                )

    def check_nat_gateways(self, vpc_id: str) -> None:
        nats = self.ec2.list_nat_gateways(vpc_id, state=NAT_AVAILABLE_STATE)
        if not nats:
            self.fail("No available NATs.", FailureCategory.RESOURCE_NOT_FOUND)
        else:
            listing = ", ".join(f"{nat.id} ({nat.subnet_id})" for nat in nats)
            self.passed(f"NATs: {listing}")

    # ---- Load balancer ----
    def check_load_balancer(self, vpc_id: str) -> None:
        lb = self.scanner.plugin("elbv2").find_load_balancer_in_vpc(
            vpc_id, INTERNET_FACING_SCHEME
        )
        lb = self.require(lb, "No internet-facing ALB in VPC.")
        self.passed(f"ALB: {lb.arn}")

        public = self.subnet_groups.get(PUBLIC, set())
        for subnet_id in sorted(lb.subnet_ids):
            if subnet_id in public:
                self.passed(f"ALB subnet {subnet_id} is PUBLIC")
            else:
                self.fail(
                    f"ALB subnet {subnet_id} not in PUBLIC set",
                    FailureCategory.PLACEMENT_VIOLATION,
                )

        self.check_listeners(lb)
        self.check_attached_target_group(lb)

    # ---- ECS placement ----
    def check_service_placement(self, cluster_arn: str, service_arn: str) -> None:
        service = self.scanner.plugin("ecs").describe_service(cluster_arn, service_arn)
        service = self.require(service, f"ECS service {service_arn} could not be described")

        if service.assign_public_ip == PUBLIC_IP_DISABLED:
            self.passed("ECS assigns NO public IPs")
        else:
            self.fail(
                "ECS should not assign public IPs",
                FailureCategory.PLACEMENT_VIOLATION,
            )

        app = self.subnet_groups.get(APP, set())
        for subnet_id in sorted(service.subnet_ids):
            if subnet_id in app:
                self.passed(f"ECS subnet {subnet_id} is an APP subnet")
            else:
                self.fail(
                    f"ECS subnet {subnet_id} not in APP set",
                    FailureCategory.PLACEMENT_VIOLATION,
                )

    def _check_ecs(self) -> None:
        ecs = self.scanner.plugin("ecs")
        cluster_arn = ecs.find_cluster(self.config.prefix)
        service_arn = ecs.find_service(cluster_arn) if cluster_arn else None
        if not cluster_arn or not service_arn:
            self.warn("Could not auto-detect ECS service.")
            return
        self.check_service_placement(cluster_arn, service_arn)

    def run(self) -> CheckReport:
        config = self.config

        with self.checking("VPC & IGW"):
            vpc_id = self.resolve_vpc(config.prefix)
            if vpc_id is None:
                # every remaining check is scoped to the VPC
                return self.report
            self.check_internet_gateway(vpc_id)

        with self.checking("Subnet discovery (by tag:Name)"):
            public = self.resolve_subnets(vpc_id, PUBLIC, config.public_subnet_pattern)
            app = self.resolve_subnets(vpc_id, APP, config.app_subnet_pattern)
            db = self.resolve_subnets(vpc_id, DB, config.db_subnet_pattern)

        with self.checking("Public subnets must default → IGW"):
            self.check_public_subnets(public)

        with self.checking("App subnets must default → NAT (prefer same-AZ NAT)"):
            self.check_app_subnets(app)

        with self.checking("DB subnets must have NO 0.0.0.0/0"):
            self.check_db_subnets(db)

        with self.checking("NAT Gateways present"):
            self.check_nat_gateways(vpc_id)

        with self.checking("ALB must be internet-facing in PUBLIC subnets"):
            self.check_load_balancer(vpc_id)

        with self.checking("ECS service uses APP subnets, no public IPs"):
            self._check_ecs()

        return self.report

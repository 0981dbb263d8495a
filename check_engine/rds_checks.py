import logging
from typing import Dict

from .base_verifier import BaseVerifier
from .check_result import CheckReport, FailureCategory
from .route_classifier import RouteTarget, SubnetRouteResolver

logger = logging.getLogger(__name__)

# ec2 reports tcp by name or by protocol number
TCP_PROTOCOLS = ("tcp", "6")


def permission_covers_port(permission: Dict, port: int) -> bool:
    """True when an ingress permission admits TCP traffic on port."""
    protocol = str(permission.get("IpProtocol", "")).lower()
    if protocol == "-1":
        return True
    if protocol not in TCP_PROTOCOLS:
        return False
    from_port, to_port = permission.get("FromPort"), permission.get("ToPort")
    if from_port is None:
        return False
    return from_port <= port <= (to_port if to_port is not None else from_port)


class RdsVerifier(BaseVerifier):
    """
    Verifies RDS posture for the 3-tier design: not publicly accessible,
    Multi-AZ, no internet route from the DB subnet group and database port
    reachable from the app security group.
    """

    name = "rds"

    def run(self) -> CheckReport:
        config = self.config
        rds = self.scanner.plugin("rds")
        db = None

        with self.checking("RDS instance"):
            db = self.require(
                rds.find_db_instance(config.prefix),
                f"DB instance not found for prefix '{config.prefix}'",
            )
            self.reporter.table(
                ["Identifier", "Status", "Engine", "Version", "Class", "Public", "MultiAZ", "Endpoint"],
                [
                    (
                        db.identifier,
                        db.status,
                        db.engine,
                        db.engine_version,
                        db.instance_class,
                        db.publicly_accessible,
                        db.multi_az,
                        db.endpoint,
                    )
                ],
            )

        if db is None:
            return self.report

        with self.checking("Public access & Multi-AZ"):
            if db.publicly_accessible:
                self.fail(
                    "RDS should not be publicly accessible",
                    FailureCategory.PLACEMENT_VIOLATION,
                )
            else:
                self.passed("RDS is NOT publicly accessible")

            if db.multi_az:
                self.passed("Multi-AZ enabled")
            else:
                self.warn("Multi-AZ disabled (okay for cost-saving in lab)")

        with self.checking("DB subnet group routes"):
            self.reporter.info(f"DB Subnet Group: {db.subnet_group_name}")
            subnet_ids = self.require(
                rds.get_subnet_group_subnets(db.subnet_group_name),
                f"No subnets in DB subnet group '{db.subnet_group_name}'",
            )
            self.reporter.info(f"DB Subnets: {' '.join(subnet_ids)}")
            routes = SubnetRouteResolver(self.scanner.plugin("ec2"), config.max_workers)
            for subnet_id, route in routes.classify_many(subnet_ids):
                if route.target is RouteTarget.NONE:
                    self.passed(f"DB subnet {subnet_id} has no internet default route")
                else:
                    self.fail(
                        f"DB subnet {subnet_id} has a default route 0.0.0.0/0 ({route}), should be NONE",
                        FailureCategory.MISCONFIGURED_ROUTE,
                    )

        with self.checking("Security groups"):
            self._check_db_ingress(db.security_group_ids)

        if db.parameter_group_name:
            self.reporter.info(f"Parameter group: {db.parameter_group_name}")

        return self.report

    def _check_db_ingress(self, security_group_ids) -> None:
        config = self.config
        ec2 = self.scanner.plugin("ec2")
        db_sg_id = self.require(
            security_group_ids[0] if security_group_ids else None,
            "Could not resolve DB security group",
        )
        db_sg = self.require(
            ec2.get_security_group(db_sg_id),
            f"DB security group {db_sg_id} could not be described",
        )
        app_sg = ec2.find_security_group_by_name(config.app_sg_name)
        self.reporter.info(f"DB_SG={db_sg_id}  APP_SG={app_sg.id if app_sg else 'unknown'}")

        port_rules = [
            p for p in db_sg.ip_permissions if permission_covers_port(p, config.db_port)
        ]
        from_app = app_sg is not None and any(
            pair.get("GroupId") == app_sg.id
            for rule in port_rules
            for pair in rule.get("UserIdGroupPairs", [])
        )

        if from_app:
            self.passed(f"DB SG allows {config.db_port} from APP SG ({app_sg.id})")
        elif port_rules:
            self.warn(
                f"DB SG allows {config.db_port} but not specifically from {config.app_sg_name} (check source group)",
                FailureCategory.PLACEMENT_VIOLATION,
            )
        else:
            self.fail(
                f"DB SG missing inbound {config.db_port} rule from App",
                FailureCategory.PLACEMENT_VIOLATION,
            )

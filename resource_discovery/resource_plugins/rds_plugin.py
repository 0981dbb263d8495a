from .base_plugin import BaseResourcePlugin
from typing import List, Optional
from .resource import DbInstance, Resource
import logging

logger = logging.getLogger(__name__)


class RDSPlugin(BaseResourcePlugin):
    """Plugin for discovering RDS database instances."""

    service_name = "rds"

    def filter_instance_info(self, instance: dict) -> DbInstance:
        """Extract relevant information from an RDS instance."""
        parameter_groups = instance.get("DBParameterGroups", [])
        return DbInstance(
            identifier=instance["DBInstanceIdentifier"],
            status=instance.get("DBInstanceStatus", ""),
            engine=instance.get("Engine", ""),
            engine_version=instance.get("EngineVersion", ""),
            instance_class=instance.get("DBInstanceClass", ""),
            publicly_accessible=bool(instance.get("PubliclyAccessible", False)),
            multi_az=bool(instance.get("MultiAZ", False)),
            endpoint=instance.get("Endpoint", {}).get("Address", ""),
            subnet_group_name=instance.get("DBSubnetGroup", {}).get(
                "DBSubnetGroupName", ""
            ),
            security_group_ids=[
                sg["VpcSecurityGroupId"] for sg in instance.get("VpcSecurityGroups", [])
            ],
            parameter_group_name=(
                parameter_groups[0].get("DBParameterGroupName")
                if parameter_groups
                else None
            ),
        )

    def find_db_instance(self, prefix: str) -> Optional[DbInstance]:
        instances = self._paginate("describe_db_instances", "DBInstances")
        match = next(
            (i for i in instances if prefix in i["DBInstanceIdentifier"]), None
        )
        return self.filter_instance_info(match) if match else None

    def get_subnet_group_subnets(self, subnet_group_name: str) -> List[str]:
        groups = self._paginate(
            "describe_db_subnet_groups",
            "DBSubnetGroups",
            DBSubnetGroupName=subnet_group_name,
        )
        if not groups:
            return []
        return sorted(
            subnet["SubnetIdentifier"] for subnet in groups[0].get("Subnets", [])
        )

    def discover_managed_resources(
        self, filter: Optional[str] = None
    ) -> List[Resource]:
        """Discover RDS instances whose identifier contains the filter."""
        resources = []
        for instance in self._paginate("describe_db_instances", "DBInstances"):
            if filter and filter not in instance["DBInstanceIdentifier"]:
                continue
            db = self.filter_instance_info(instance)
            resources.append(
                Resource(
                    type="RDS",
                    name=db.identifier,
                    id=db.endpoint or db.identifier,
                    related_resources=db.security_group_ids,
                )
            )
        return resources

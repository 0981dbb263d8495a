import logging
from typing import List, Optional

from .base_plugin import BaseResourcePlugin
from .resource import EcsService, Resource, TaskDefinition

logger = logging.getLogger(__name__)


class ECSPlugin(BaseResourcePlugin):
    """Plugin for ECS clusters, services and task definitions."""

    service_name = "ecs"

    def list_cluster_arns(self) -> List[str]:
        return self._paginate("list_clusters", "clusterArns")

    def list_service_arns(self, cluster_arn: str) -> List[str]:
        return self._paginate("list_services", "serviceArns", cluster=cluster_arn)

    def find_cluster(self, prefix: str, fallback: bool = False) -> Optional[str]:
        """First cluster ARN containing the prefix, or the first cluster when fallback is set."""
        arns = self.list_cluster_arns()
        match = next((arn for arn in arns if prefix in arn), None)
        if match is None and fallback and arns:
            logger.info(f"No cluster matches '{prefix}', using {arns[0]}")
            match = arns[0]
        return match

    def find_service(
        self, cluster_arn: str, prefix: Optional[str] = None, fallback: bool = True
    ) -> Optional[str]:
        arns = self.list_service_arns(cluster_arn)
        match = next((arn for arn in arns if prefix and prefix in arn), None)
        if match is None and fallback and arns:
            match = arns[0]
        return match

    def describe_service(self, cluster_arn: str, service_arn: str) -> Optional[EcsService]:
        services = self._call(
            "describe_services", cluster=cluster_arn, services=[service_arn]
        ).get("services", [])
        if not services:
            return None

        service = services[0]
        vpc_config = service.get("networkConfiguration", {}).get(
            "awsvpcConfiguration", {}
        )
        return EcsService(
            arn=service.get("serviceArn", service_arn),
            name=service.get("serviceName", ""),
            cluster_arn=cluster_arn,
            status=service.get("status", ""),
            desired_count=service.get("desiredCount", 0),
            running_count=service.get("runningCount", 0),
            pending_count=service.get("pendingCount", 0),
            launch_type=service.get("launchType", ""),
            assign_public_ip=vpc_config.get("assignPublicIp", ""),
            subnet_ids=list(vpc_config.get("subnets", [])),
            task_definition=service.get("taskDefinition", ""),
            load_balancers=list(service.get("loadBalancers", [])),
        )

    def describe_task_definition(self, task_definition: str) -> TaskDefinition:
        definition = self._call(
            "describe_task_definition", taskDefinition=task_definition
        )["taskDefinition"]
        containers = definition.get("containerDefinitions", [])
        first = containers[0] if containers else {}
        log_options = first.get("logConfiguration", {}).get("options", {})
        return TaskDefinition(
            arn=definition.get("taskDefinitionArn", task_definition),
            environment=list(first.get("environment", [])),
            log_group=log_options.get("awslogs-group"),
        )

    def discover_managed_resources(
        self, filter: Optional[str] = None
    ) -> List[Resource]:
        """Discover ECS clusters containing the filter and the services they run."""
        resources = []
        for cluster_arn in self.list_cluster_arns():
            if filter and filter not in cluster_arn:
                continue
            service_arns = self.list_service_arns(cluster_arn)
            resources.append(
                Resource(
                    type="ECS Cluster",
                    name=cluster_arn.split("/")[-1],
                    id=cluster_arn,
                    related_resources=[arn.split("/")[-1] for arn in service_arns],
                )
            )
        return resources

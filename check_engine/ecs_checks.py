import logging

from constants import PUBLIC_IP_DISABLED
from .base_verifier import BaseVerifier
from .check_result import CheckReport, FailureCategory

logger = logging.getLogger(__name__)


class EcsVerifier(BaseVerifier):
    """
    Verifies the ECS service aligns with the design: steady service without
    public IPs, a task definition with its environment, a recent log scan and
    healthy load balancer targets.
    """

    name = "ecs"

    def run(self) -> CheckReport:
        config = self.config
        ecs = self.scanner.plugin("ecs")
        service = None
        task_definition = None

        with self.checking("ECS service"):
            cluster_arn = self.require(
                ecs.find_cluster(config.prefix, fallback=True), "No ECS cluster found"
            )
            service_arn = self.require(
                ecs.find_service(cluster_arn, config.prefix, fallback=True),
                f"No ECS service found in cluster {cluster_arn}",
            )
            self.reporter.info(f"Cluster: {cluster_arn}")
            self.reporter.info(f"Service: {service_arn}")
            service = self.require(
                ecs.describe_service(cluster_arn, service_arn),
                f"ECS service {service_arn} could not be described",
            )
            self.reporter.table(
                ["Status", "Desired", "Running", "Pending", "LaunchType"],
                [
                    (
                        service.status,
                        service.desired_count,
                        service.running_count,
                        service.pending_count,
                        service.launch_type,
                    )
                ],
            )

        if service is None:
            return self.report

        with self.checking("Networking flags"):
            if service.assign_public_ip == PUBLIC_IP_DISABLED:
                self.passed("assignPublicIp=DISABLED (private subnets as intended)")
            else:
                self.warn(
                    f"assignPublicIp is '{service.assign_public_ip}' (expected DISABLED)",
                    FailureCategory.PLACEMENT_VIOLATION,
                )

        with self.checking("Task definition & environment"):
            self.require(service.task_definition, "No task definition attached")
            self.reporter.info(f"TaskDef: {service.task_definition}")
            task_definition = ecs.describe_task_definition(service.task_definition)
            self.reporter.info("Container environment (first container):")
            if task_definition.environment:
                self.reporter.table(
                    ["Name", "Value"],
                    [(env.get("name"), env.get("value")) for env in task_definition.environment],
                )
            else:
                self.warn("No env block found")

        with self.checking("Logs"):
            if task_definition is None or not task_definition.log_group:
                self.warn("awslogs not configured in task definition (skipping log scan)")
            else:
                self._scan_logs(task_definition.log_group)

        with self.checking("Load balancer attachment"):
            attachment = service.load_balancers[0] if service.load_balancers else {}
            if not attachment.get("targetGroupArn"):
                self.warn("Service has no load balancer attachment")
            else:
                self.reporter.info(f"  Target Group: {attachment['targetGroupArn']}")
                self.reporter.info(
                    f"  Container:    {attachment.get('containerName')}:{attachment.get('containerPort')}"
                )
                self.check_target_health(attachment["targetGroupArn"])

        with self.checking("Subnets used by service"):
            self.reporter.info(" ".join(service.subnet_ids) or "(none)")

        return self.report

    def _scan_logs(self, log_group: str) -> None:
        minutes = self.config.log_since_minutes
        self.reporter.info(f"Log group: {log_group}")
        self.reporter.info(f"Recent errors (last {minutes}m):")
        errors = self.scanner.plugin("cw").find_errors(
            log_group, self.config.log_error_pattern, minutes
        )
        if not errors:
            self.reporter.info("(no obvious DB/migration errors)")
        for message in errors:
            self.reporter.info(message)

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, List, Optional, TypeVar

from constants import TARGET_HEALTHY_STATE
from exceptions import ResourceNotFoundError
from resource_discovery import ResourceScanner
from resource_discovery.resource_plugins.resource import LoadBalancer
from verifier_config import VerifierConfig
from .check_result import CheckReport, CheckResult, CheckStatus, FailureCategory
from .health_probe import probe
from .reporter import Reporter

logger = logging.getLogger(__name__)

T = TypeVar("T")

ProbeFn = Callable[[str, float], Optional[int]]


class BaseVerifier:
    """
    Shared plumbing for verifiers: result recording, per-section failure
    isolation and the load balancer checks used by more than one verifier.
    """

    name = ""

    def __init__(
        self,
        config: VerifierConfig,
        scanner: ResourceScanner,
        reporter: Optional[Reporter] = None,
        probe_fn: ProbeFn = probe,
    ) -> None:
        self.config = config
        self.scanner = scanner
        self.reporter = reporter or Reporter()
        self.probe = probe_fn
        self.report = CheckReport()
        self._section = ""

    def run(self) -> CheckReport:
        raise NotImplementedError

    #### Result recording ####
    def _record(
        self,
        status: CheckStatus,
        message: str,
        category: Optional[FailureCategory] = None,
    ) -> CheckResult:
        result = self.report.add(
            CheckResult(status, message, section=self._section, category=category)
        )
        self.reporter.result(result)
        return result

    def passed(self, message: str) -> CheckResult:
        return self._record(CheckStatus.PASS, message)

    def warn(self, message: str, category: Optional[FailureCategory] = None) -> CheckResult:
        return self._record(CheckStatus.WARN, message, category)

    def fail(self, message: str, category: Optional[FailureCategory] = None) -> CheckResult:
        return self._record(CheckStatus.FAIL, message, category)

    #### Section control ####
    @contextmanager
    def checking(self, title: str) -> Iterator[None]:
        """Run a section; a missing prerequisite records a Fail and skips the rest of it."""
        self._section = title
        self.reporter.section(title)
        try:
            yield
        except ResourceNotFoundError as e:
            logger.info(f"[{self.name}] skipping rest of '{title}': {e}")
            self.fail(str(e), FailureCategory.RESOURCE_NOT_FOUND)

    @staticmethod
    def require(value: Optional[T], message: str) -> T:
        if not value:
            raise ResourceNotFoundError(message)
        return value

    #### Load balancer checks ####
    def check_listeners(self, lb: LoadBalancer) -> List[int]:
        ports = self.scanner.plugin("elbv2").get_listener_ports(lb.arn)
        http_port, https_port = self.config.http_port, self.config.https_port

        if http_port in ports:
            self.passed(f"ALB has port {http_port}")
        else:
            self.fail(f"ALB missing port {http_port}")

        if https_port in ports:
            self.passed(f"ALB has port {https_port}")
        else:
            self.warn(f"ALB has no {https_port} (HTTP only)")
        return ports

    def check_target_health(self, target_group_arn: str) -> None:
        states = self.scanner.plugin("elbv2").get_target_health_states(target_group_arn)
        if not states:
            self.warn(
                "Target group has no registered targets",
                FailureCategory.UNHEALTHY_TARGET,
            )
        elif any(state != TARGET_HEALTHY_STATE for state in states):
            self.fail(
                f"Targets NOT healthy: {' '.join(states)}",
                FailureCategory.UNHEALTHY_TARGET,
            )
        else:
            self.passed(f"Targets healthy: {' '.join(states)}")

    def check_attached_target_group(self, lb: LoadBalancer) -> None:
        target_groups = self.scanner.plugin("elbv2").get_target_groups(lb.arn)
        self.require(target_groups, "No target group attached to the ALB")
        self.check_target_health(target_groups[0].arn)

import logging

from constants import INTERNET_FACING_SCHEME
from .base_verifier import BaseVerifier
from .check_result import CheckReport, FailureCategory

logger = logging.getLogger(__name__)


class AlbVerifier(BaseVerifier):
    """Verifies the ALB is internet-facing, listens on 80/443, has healthy targets and serves /health."""

    name = "alb"

    def run(self) -> CheckReport:
        config = self.config
        lb = None

        with self.checking("Application Load Balancer"):
            lb = self.scanner.plugin("elbv2").find_load_balancer_by_name(config.prefix)
            lb = self.require(lb, f"No ALB found matching '{config.prefix}'")
            if lb.scheme == INTERNET_FACING_SCHEME:
                self.passed(f"ALB is internet-facing: {lb.dns_name}")
            else:
                self.fail(
                    f"ALB is not internet-facing (scheme={lb.scheme})",
                    FailureCategory.PLACEMENT_VIOLATION,
                )

        if lb is None:
            return self.report

        scheme = "http"
        with self.checking("Listeners"):
            if config.https_port in self.check_listeners(lb):
                scheme = "https"

        with self.checking("Target group health"):
            self.check_attached_target_group(lb)

        with self.checking("Health endpoint"):
            url = f"{scheme}://{lb.dns_name}{config.health_path}"
            code = self.probe(url, config.http_timeout)
            self.reporter.info(f"ALB {config.health_path} → {code or 'unreachable'}")
            if code == 200:
                self.passed("Health endpoint returned 200")
            elif code is None:
                self.warn(f"Health endpoint {url} unreachable (check DNS/TLS/security groups)")
            else:
                self.warn(f"Health endpoint returned {code} (check app routing/paths)")

        return self.report

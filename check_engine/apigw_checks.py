from .base_verifier import BaseVerifier
from .check_result import CheckReport


class ApiGatewayVerifier(BaseVerifier):
    """Lists HTTP APIs and reports what their health endpoint answers. Never fails the run."""

    name = "apigw"

    def run(self) -> CheckReport:
        config = self.config
        self._section = "API Gateway (HTTP APIs via apigatewayv2)"
        self.reporter.section(self._section)

        apis = self.scanner.plugin("apigw").list_http_apis()
        if not apis:
            self.reporter.info(
                "No HTTP APIs found (apigatewayv2). If you used REST APIs, check 'apigateway' instead."
            )
            return self.report

        for api in apis:
            self.reporter.info(f"API: {api.name}  URL: {api.endpoint}")
            code = self.probe(
                f"{api.endpoint.rstrip('/')}{config.health_path}", config.http_timeout
            )
            self.reporter.info(f"  {config.health_path} → {code or 'unreachable'}")

        return self.report

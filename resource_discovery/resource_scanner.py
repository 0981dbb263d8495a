import importlib
import logging
from typing import Any, Dict, List

from .resource_plugins.resource import Resource

logger = logging.getLogger(__name__)

supported_services = ["ec2", "elbv2", "ecs", "rds", "apigw", "cw"]


class ResourceScanner:
    def __init__(self, session) -> None:
        self._session = session
        self.plugins = self._load_plugins()

    def _load_plugins(self) -> Dict[str, Any]:
        plugins = {}

        for service in supported_services:
            module = importlib.import_module(
                f".resource_plugins.{service}_plugin", package=__package__
            )
            plugin_class = getattr(module, f"{service.upper()}Plugin")
            plugins[service] = plugin_class(self._session)

        return plugins

    def plugin(self, service_name: str):
        if service_name not in self.plugins:
            raise ValueError(f"Unsupported service: {service_name}")
        return self.plugins[service_name]

    def scan_all_supported_resources(self, prefix: str) -> List[Resource]:
        discovered_resources: List[Resource] = []

        for service_name, plugin in self.plugins.items():
            resources = plugin.discover_managed_resources(prefix)
            logger.info(f"Discovered {len(resources)} {service_name} resources")
            discovered_resources.extend(resources)

        return discovered_resources

    def scan_resources(self, service_name: str, prefix: str) -> List[Resource]:
        return self.plugin(service_name).discover_managed_resources(prefix)

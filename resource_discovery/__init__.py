from .resource_scanner import ResourceScanner, supported_services
from .resource_plugins.resource import Resource

__all__ = ["ResourceScanner", "Resource", "supported_services"]

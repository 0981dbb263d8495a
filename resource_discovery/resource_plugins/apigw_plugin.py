from typing import List, Optional

from .base_plugin import BaseResourcePlugin
from .resource import HttpApi, Resource


class APIGWPlugin(BaseResourcePlugin):
    """Plugin for HTTP APIs served through API Gateway v2."""

    service_name = "apigatewayv2"

    def list_http_apis(self) -> List[HttpApi]:
        return [
            HttpApi(
                id=item["ApiId"],
                name=item.get("Name", ""),
                endpoint=item.get("ApiEndpoint", ""),
            )
            for item in self._paginate("get_apis", "Items")
        ]

    def discover_managed_resources(
        self, filter: Optional[str] = None
    ) -> List[Resource]:
        return [
            Resource(type="HTTP API", name=api.name, id=api.id, related_resources=[api.endpoint])
            for api in self.list_http_apis()
            if not filter or filter in api.name
        ]

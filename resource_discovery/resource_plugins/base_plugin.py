import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from botocore.exceptions import BotoCoreError, ClientError

from exceptions import AwsApiError
from .resource import Resource

logger = logging.getLogger(__name__)


class BaseResourcePlugin(ABC):
    """Wraps one boto3 service client and turns describe-calls into resource records."""

    service_name: str = ""

    def __init__(self, session):
        self.client = session.client(self.service_name)

    @abstractmethod
    def discover_managed_resources(
        self, filter: Optional[str] = None
    ) -> List[Resource]:
        """
        Discover and return resources whose name or id contains the filter.
        """
        pass

    def _call(self, operation: str, **kwargs) -> Dict[str, Any]:
        """Invoke a client operation, turning botocore failures into AwsApiError."""
        try:
            return getattr(self.client, operation)(**kwargs)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"{self.service_name}.{operation} failed: {e}")
            raise AwsApiError(f"{self.service_name}.{operation}", e) from e

    def _paginate(self, operation: str, result_key: str, **kwargs) -> List[Any]:
        """Collect result_key across all pages when the operation supports paging."""
        try:
            if not self.client.can_paginate(operation):
                return getattr(self.client, operation)(**kwargs).get(result_key, [])

            items: List[Any] = []
            paginator = self.client.get_paginator(operation)
            for page in paginator.paginate(**kwargs):
                items.extend(page.get(result_key, []))
            return items
        except (BotoCoreError, ClientError) as e:
            logger.error(f"{self.service_name}.{operation} failed: {e}")
            raise AwsApiError(f"{self.service_name}.{operation}", e) from e

    @staticmethod
    def _get_tag_value(
        tags: List[dict], key: str, default: Optional[str] = None
    ) -> Optional[str]:
        """Helper method to extract tag value."""
        return next((tag["Value"] for tag in tags if tag["Key"] == key), default)

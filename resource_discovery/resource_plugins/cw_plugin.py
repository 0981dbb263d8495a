import logging
import re
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from .base_plugin import BaseResourcePlugin
from .resource import Resource

logger = logging.getLogger(__name__)


class CWPlugin(BaseResourcePlugin):
    """Plugin for CloudWatch Logs groups and recent events."""

    service_name = "logs"

    def recent_messages(
        self, log_group: str, since_minutes: int, now: Optional[datetime] = None
    ) -> List[str]:
        """Messages logged to the group within the last since_minutes."""
        now = now or datetime.now(timezone.utc)
        start_time = int((now - timedelta(minutes=since_minutes)).timestamp() * 1000)
        events = self._paginate(
            "filter_log_events",
            "events",
            logGroupName=log_group,
            startTime=start_time,
        )
        return [event.get("message", "").rstrip() for event in events]

    def find_errors(
        self,
        log_group: str,
        pattern: str,
        since_minutes: int,
        now: Optional[datetime] = None,
    ) -> List[str]:
        """Recent messages matching pattern, case-insensitively."""
        regex = re.compile(pattern, re.IGNORECASE)
        matches = [
            message
            for message in self.recent_messages(log_group, since_minutes, now)
            if regex.search(message)
        ]
        logger.info(f"{len(matches)} error lines in {log_group} (last {since_minutes}m)")
        return matches

    def discover_managed_resources(
        self, filter: Optional[str] = None
    ) -> List[Resource]:
        """Discover log groups whose name contains the filter."""
        groups = self._paginate("describe_log_groups", "logGroups")
        return [
            Resource(type="Log Group", name=group["logGroupName"], id=group.get("arn", ""))
            for group in groups
            if not filter or filter in group["logGroupName"]
        ]

import boto3
import logging
from typing import Dict, Optional, Tuple

from constants import DEFAULT_REGION

logger = logging.getLogger(__name__)


def create_session(
    region: str = DEFAULT_REGION, profile: Optional[str] = None
) -> boto3.Session:
    """Create a boto3 Session for the given region and optional named profile."""
    try:
        return boto3.Session(profile_name=profile, region_name=region)
    except Exception as e:
        logger.error(f"Failed to create session (profile={profile}, region={region}): {e}")
        raise


class SessionManager:
    _sessions: Dict[Tuple[Optional[str], str], boto3.Session] = {}

    @classmethod
    def get_session(
        cls,
        region: str = DEFAULT_REGION,
        profile: Optional[str] = None,
    ) -> boto3.Session:
        """Get or create a boto3 Session for the specified profile and region."""
        session_key = (profile, region)

        if session_key not in cls._sessions:
            cls._sessions[session_key] = create_session(region, profile)
            logger.info(f"Created session for profile={profile or 'default'} region={region}")

        return cls._sessions[session_key]

    @classmethod
    def clear_session(cls, region: str, profile: Optional[str] = None) -> None:
        """Remove a session from the cache."""
        session_key = (profile, region)
        if session_key in cls._sessions:
            del cls._sessions[session_key]
            logger.info(f"Session cleared for {session_key}")

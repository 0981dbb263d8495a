import logging
import os
import re
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from constants import (
    APP_SG_NAME,
    APP_SUBNET_PATTERN,
    DB_PORT,
    DB_SUBNET_PATTERN,
    DEFAULT_MAX_WORKERS,
    DEFAULT_PREFIX,
    DEFAULT_REGION,
    HEALTH_PATH,
    HTTP_PORT,
    HTTP_TIMEOUT,
    HTTPS_PORT,
    LOG_ERROR_PATTERN,
    LOG_SINCE_MINUTES,
    PUBLIC_SUBNET_PATTERN,
)
from exceptions import ConfigurationError
from utils import load_yaml, validate_config_paths

logger = logging.getLogger(__name__)

# Environment variable -> config field
ENV_OVERRIDES: Dict[str, str] = {
    "REGION": "region",
    "PREFIX": "prefix",
    "AWS_PROFILE": "profile",
    "APP_SG_NAME": "app_sg_name",
    "PUB_PATTERN": "public_subnet_pattern",
    "APP_PATTERN": "app_subnet_pattern",
    "DB_PATTERN": "db_subnet_pattern",
}


@dataclass(frozen=True)
class VerifierConfig:
    """Settings shared by every verifier for one run.

    region: AWS region to query.
    prefix: resource-name prefix used to find the VPC, ALB, cluster and DB.
    profile: optional named boto3 profile.
    public_subnet_pattern / app_subnet_pattern / db_subnet_pattern:
        tag:Name wildcard patterns selecting each subnet group.
    app_sg_name: security group name of the app tier, expected as the DB ingress source.
    http_port / https_port: listener ports expected on the load balancer.
    db_port: database port expected to be open from the app tier.
    health_path: path probed on the ALB and HTTP APIs.
    http_timeout: seconds before a health probe gives up.
    log_since_minutes: how far back the ECS log scan looks.
    log_error_pattern: case-insensitive regex marking a log line as an error.
    max_workers: thread pool size for subnet classification (1 disables fan-out).
    """

    region: str = DEFAULT_REGION
    prefix: str = DEFAULT_PREFIX
    profile: Optional[str] = None
    public_subnet_pattern: str = PUBLIC_SUBNET_PATTERN
    app_subnet_pattern: str = APP_SUBNET_PATTERN
    db_subnet_pattern: str = DB_SUBNET_PATTERN
    app_sg_name: str = APP_SG_NAME
    http_port: int = HTTP_PORT
    https_port: int = HTTPS_PORT
    db_port: int = DB_PORT
    health_path: str = HEALTH_PATH
    http_timeout: float = HTTP_TIMEOUT
    log_since_minutes: int = LOG_SINCE_MINUTES
    log_error_pattern: str = LOG_ERROR_PATTERN
    max_workers: int = DEFAULT_MAX_WORKERS

    def with_overrides(self, overrides: Mapping[str, Any]) -> "VerifierConfig":
        """Return a copy with the non-None overrides applied, coerced to field types."""
        known = {f.name: f for f in fields(self)}
        changes: Dict[str, Any] = {}
        for key, value in overrides.items():
            if key not in known:
                raise ConfigurationError(f"Unknown configuration key: {key}")
            if value is None:
                continue
            changes[key] = _coerce(key, value, type(getattr(VerifierConfig, key, "")))
        if "log_error_pattern" in changes:
            _validate_pattern(changes["log_error_pattern"])
        return replace(self, **changes)


def _validate_pattern(pattern: str) -> None:
    try:
        re.compile(pattern)
    except re.error as e:
        raise ConfigurationError(f"Invalid log_error_pattern {pattern!r}: {e}") from e


def _coerce(key: str, value: Any, target: type) -> Any:
    # profile defaults to None so its class attribute gives NoneType
    if target in (type(None), str):
        return str(value)
    try:
        return target(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(
            f"Invalid value for {key}: {value!r} ({target.__name__} expected)"
        ) from e


class ConfigLoader:
    """Builds a VerifierConfig from defaults, a YAML file, the environment and CLI flags."""

    @staticmethod
    def load_file_overrides(path: Union[str, Path]) -> Dict[str, Any]:
        path = Path(path)
        validate_config_paths({"topology": path}, logger)
        try:
            data = load_yaml(path)
        except yaml.YAMLError as e:
            logger.error(f"Error parsing YAML config {path}: {e}")
            raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")
        logger.info(f"Loaded {len(data)} settings from {path}")
        return data

    @staticmethod
    def load_env_overrides(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        environ = os.environ if environ is None else environ
        return {
            field_name: environ[var]
            for var, field_name in ENV_OVERRIDES.items()
            if environ.get(var)
        }

    @classmethod
    def load(
        cls,
        config_path: Optional[Union[str, Path]] = None,
        environ: Optional[Mapping[str, str]] = None,
        cli_overrides: Optional[Mapping[str, Any]] = None,
    ) -> VerifierConfig:
        config = VerifierConfig()
        if config_path:
            config = config.with_overrides(cls.load_file_overrides(config_path))
        config = config.with_overrides(cls.load_env_overrides(environ))
        if cli_overrides:
            config = config.with_overrides(cli_overrides)
        logger.debug(f"Effective configuration: {config}")
        return config

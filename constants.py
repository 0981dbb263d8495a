from typing import Final

# Logging
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LOG_LEVEL = "WARNING"

# AWS
DEFAULT_REGION: Final[str] = "us-east-1"
DEFAULT_PREFIX: Final[str] = "crudapp"
DEFAULT_ROUTE_CIDR: Final[str] = "0.0.0.0/0"
INTERNET_FACING_SCHEME: Final[str] = "internet-facing"
NAT_AVAILABLE_STATE: Final[str] = "available"
TARGET_HEALTHY_STATE: Final[str] = "healthy"
PUBLIC_IP_DISABLED: Final[str] = "DISABLED"

# Subnet tag:Name patterns
PUBLIC_SUBNET_PATTERN: Final[str] = "*subnet-public*"
APP_SUBNET_PATTERN: Final[str] = "*app-subnet-private*"
DB_SUBNET_PATTERN: Final[str] = "*db-subnet-private*"
APP_SG_NAME: Final[str] = "crud-app-sg"

# Ports
HTTP_PORT: Final[int] = 80
HTTPS_PORT: Final[int] = 443
DB_PORT: Final[int] = 5432

# Probes and log scanning
HEALTH_PATH: Final[str] = "/health"
HTTP_TIMEOUT: Final[float] = 5.0
LOG_SINCE_MINUTES: Final[int] = 15
LOG_ERROR_PATTERN: Final[str] = "OperationalError|psycopg|alembic|migrat|error"

DEFAULT_MAX_WORKERS: Final[int] = 4

# Checks selectable from the CLI
CHECKS: Final[tuple] = ("network", "alb", "ecs", "rds", "apigw", "inventory")

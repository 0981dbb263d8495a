from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class Resource:
    type: str  # VPC, Subnet, ALB, ECS, RDS, etc.
    name: str  # Name tag or service name
    id: str = ""  # Resource ID (e.g., vpc-id, load balancer ARN)
    related_resources: List[str] = field(default_factory=list)


@dataclass
class Vpc:
    id: str
    name: str = ""
    cidr_block: str = ""


@dataclass
class Subnet:
    id: str
    availability_zone: str = ""
    name: str = ""
    vpc_id: str = ""


@dataclass
class RouteTable:
    id: str
    routes: List[Dict] = field(default_factory=list)
    main: bool = False


@dataclass
class NatGateway:
    id: str
    subnet_id: str
    state: str = ""


@dataclass
class LoadBalancer:
    arn: str
    name: str
    scheme: str = ""
    dns_name: str = ""
    vpc_id: str = ""
    subnet_ids: List[str] = field(default_factory=list)


@dataclass
class TargetGroup:
    arn: str
    name: str = ""
    port: Optional[int] = None


@dataclass
class EcsService:
    arn: str
    name: str
    cluster_arn: str
    status: str = ""
    desired_count: int = 0
    running_count: int = 0
    pending_count: int = 0
    launch_type: str = ""
    assign_public_ip: str = ""
    subnet_ids: List[str] = field(default_factory=list)
    task_definition: str = ""
    load_balancers: List[Dict] = field(default_factory=list)


@dataclass
class TaskDefinition:
    arn: str
    environment: List[Dict[str, str]] = field(default_factory=list)
    log_group: Optional[str] = None


@dataclass
class DbInstance:
    identifier: str
    status: str = ""
    engine: str = ""
    engine_version: str = ""
    instance_class: str = ""
    publicly_accessible: bool = False
    multi_az: bool = False
    endpoint: str = ""
    subnet_group_name: str = ""
    security_group_ids: List[str] = field(default_factory=list)
    parameter_group_name: Optional[str] = None


@dataclass
class SecurityGroup:
    id: str
    name: str = ""
    ip_permissions: List[Dict] = field(default_factory=list)


@dataclass
class HttpApi:
    id: str
    name: str
    endpoint: str = ""

from .check_result import CheckReport, CheckResult, CheckStatus, FailureCategory
from .route_classifier import (
    RouteClassification,
    RouteTarget,
    SubnetRouteResolver,
    classify_route_table,
)
from .reporter import Reporter, render_table
from .base_verifier import BaseVerifier
from .network_checks import TopologyVerifier
from .alb_checks import AlbVerifier
from .ecs_checks import EcsVerifier
from .rds_checks import RdsVerifier
from .apigw_checks import ApiGatewayVerifier
from .inventory import InventoryVerifier

VERIFIERS = {
    "network": TopologyVerifier,
    "alb": AlbVerifier,
    "ecs": EcsVerifier,
    "rds": RdsVerifier,
    "apigw": ApiGatewayVerifier,
    "inventory": InventoryVerifier,
}

__all__ = [
    "CheckReport",
    "CheckResult",
    "CheckStatus",
    "FailureCategory",
    "RouteClassification",
    "RouteTarget",
    "SubnetRouteResolver",
    "classify_route_table",
    "Reporter",
    "render_table",
    "BaseVerifier",
    "TopologyVerifier",
    "AlbVerifier",
    "EcsVerifier",
    "RdsVerifier",
    "ApiGatewayVerifier",
    "InventoryVerifier",
    "VERIFIERS",
]

"""Deploy conversation: version menu, confirmation and execution."""

from .catalog import VersionOption, build_catalog, is_version_value
from .commands import route_mention
from .executor import DeploymentRequest, SimulatedDeploymentExecutor, run_deployment
from .interactions import route_interaction
from .state import (
    CONFIRM_DEPLOYMENT_BLOCK_ID,
    DENY_VALUE,
    SELECT_VERSION_BLOCK_ID,
    AwaitingConfirmation,
    AwaitingVersion,
    Cancelled,
    Executing,
    resolve_stage,
)

__all__ = [
    "VersionOption",
    "build_catalog",
    "is_version_value",
    "route_mention",
    "route_interaction",
    "DeploymentRequest",
    "SimulatedDeploymentExecutor",
    "run_deployment",
    "AwaitingVersion",
    "AwaitingConfirmation",
    "Executing",
    "Cancelled",
    "resolve_stage",
    "SELECT_VERSION_BLOCK_ID",
    "CONFIRM_DEPLOYMENT_BLOCK_ID",
    "DENY_VALUE",
]

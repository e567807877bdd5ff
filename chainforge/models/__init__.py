from .token import (
    MODULE_VOCABULARY,
    ChainScaffoldRequest,
    ConsensusType,
    ScaffoldResult,
    TokenDeploymentRequest,
    TokenDeploymentResult,
    TokenStandard,
    ordered_modules,
)
from .deployment import UNKNOWN, DeploymentRecord, DisplayRow, VerificationStatus
from .activity import ActivityKind, ActivityLogEntry
from .operations import BalanceRequest, ContractTarget, MintRequest

"""
Token deployment and chain scaffold request models
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, List, Optional


class TokenStandard(str, Enum):
    """Supported token contract shapes"""
    ERC20 = "ERC20"
    ERC721 = "ERC721"
    ERC1155 = "ERC1155"


class ConsensusType(str, Enum):
    """Consensus options offered for a chain scaffold"""
    PROOF_OF_AUTHORITY = "ProofOfAuthority"
    PROOF_OF_STAKE = "ProofOfStake"

    @property
    def label(self) -> str:
        return "Proof of Authority" if self is ConsensusType.PROOF_OF_AUTHORITY else "Proof of Stake"


# Fixed module vocabulary, in the order modules are serialized
MODULE_VOCABULARY = (
    "mintable",
    "burnable",
    "pausable",
    "governance",
    "accessControl",
    "ownable",
    "tokenTransfer",
    "metadata",
)


def ordered_modules(modules) -> List[str]:
    """Return module names in vocabulary order"""
    return [name for name in MODULE_VOCABULARY if name in modules]


@dataclass(frozen=True)
class TokenDeploymentRequest:
    """Validated token deployment, ready to send to /create-token"""
    standard: TokenStandard
    name: str
    symbol: Optional[str] = None
    initial_supply: Optional[int] = None
    decimals: Optional[int] = None
    base_uri: Optional[str] = None
    modules: FrozenSet[str] = field(default_factory=frozenset)

    def to_payload(self) -> Dict:
        """Serialize, leaving out every field the standard does not carry"""
        payload = {"standard": self.standard.value, "name": self.name}
        if self.symbol is not None:
            payload["symbol"] = self.symbol
        if self.initial_supply is not None:
            payload["initialSupply"] = self.initial_supply
        if self.decimals is not None:
            payload["decimals"] = self.decimals
        if self.base_uri is not None:
            payload["baseURI"] = self.base_uri
        payload["modules"] = ordered_modules(self.modules)
        return payload

    @property
    def label(self) -> str:
        return f"{self.name} ({self.standard.value})"


@dataclass(frozen=True)
class ChainScaffoldRequest:
    """Validated chain scaffold request for /create-chain"""
    project_name: str
    consensus_type: ConsensusType = ConsensusType.PROOF_OF_AUTHORITY
    modules: FrozenSet[str] = field(default_factory=frozenset)

    def to_payload(self) -> Dict:
        return {
            "projectName": self.project_name,
            "consensusType": self.consensus_type.value,
            "modules": ordered_modules(self.modules),
        }


@dataclass(frozen=True)
class TokenDeploymentResult:
    """Fields the console reads back from /create-token"""
    message: str
    contract_address: Optional[str] = None
    tx_hash: Optional[str] = None
    network: Optional[str] = None
    download: Optional[str] = None


@dataclass(frozen=True)
class ScaffoldResult:
    """Fields the console reads back from /create-chain"""
    message: str
    path: Optional[str] = None
    download: Optional[str] = None

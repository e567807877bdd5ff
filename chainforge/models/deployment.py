"""
Deployment record models: the backend's view and the console's display row
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional

UNKNOWN = "unknown"  # Sentinel shown for any missing text field


class VerificationStatus(str, Enum):
    """Verification lifecycle states as reported by the backend"""
    NOT_REQUESTED = "not_requested"
    SUBMITTING = "submitting"
    PENDING = "pending"
    VERIFIED = "verified"
    FAILED = "failed"
    RETRYABLE = "retryable"
    UNKNOWN = "unknown"  # Backend reported a status outside the vocabulary


def _opt_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


@dataclass(frozen=True)
class DeploymentRecord:
    """Backend deployment record. Every field may be missing."""
    record_id: Optional[str] = None  # Deployment file name or id
    token_name: Optional[str] = None
    token_type: Optional[str] = None
    network: Optional[str] = None
    contract_address: Optional[str] = None
    tx_hash: Optional[str] = None
    deployed_at: Optional[str] = None
    verification_status: Optional[str] = None
    verification_message: Optional[str] = None
    explorer_url: Optional[str] = None

    @classmethod
    def from_payload(cls, data: Mapping) -> "DeploymentRecord":
        """Map one entry of the /deployments `records` array"""
        if not isinstance(data, Mapping):
            return cls()

        token = data.get("token")
        nested_name = token.get("tokenName") if isinstance(token, Mapping) else None

        return cls(
            record_id=_opt_str(data.get("file") or data.get("id")),
            token_name=_opt_str(nested_name or data.get("tokenName")),
            token_type=_opt_str(data.get("tokenType")),
            network=_opt_str(data.get("network")),
            contract_address=_opt_str(data.get("contractAddress")),
            tx_hash=_opt_str(data.get("txHash")),
            deployed_at=_opt_str(data.get("deployedAt")),
            verification_status=_opt_str(data.get("verificationStatus")),
            verification_message=_opt_str(data.get("verificationMessage")),
            explorer_url=_opt_str(data.get("explorerUrl") or data.get("etherscanUrl")),
        )


@dataclass(frozen=True)
class DisplayRow:
    """Fully defaulted projection of a DeploymentRecord. Never persisted."""
    record_id: str
    token_name: str
    token_type: str
    network: str
    contract_address: str
    tx_hash: str
    deployed_at: str
    verification_status: VerificationStatus
    verification_message: str
    explorer_url: Optional[str]
    contract_url: Optional[str]
    tx_url: Optional[str]

    @property
    def verified_url(self) -> Optional[str]:
        return self.explorer_url or self.contract_url

    def as_record(self) -> DeploymentRecord:
        """Shape this row back into a record, e.g. for re-normalization"""
        return DeploymentRecord(
            record_id=self.record_id,
            token_name=self.token_name,
            token_type=self.token_type,
            network=self.network,
            contract_address=self.contract_address,
            tx_hash=self.tx_hash,
            deployed_at=self.deployed_at,
            verification_status=self.verification_status.value,
            verification_message=self.verification_message,
            explorer_url=self.explorer_url,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file": self.record_id,
            "tokenName": self.token_name,
            "tokenType": self.token_type,
            "network": self.network,
            "contractAddress": self.contract_address,
            "txHash": self.tx_hash,
            "deployedAt": self.deployed_at,
            "verificationStatus": self.verification_status.value,
            "verificationMessage": self.verification_message,
            "explorerUrl": self.explorer_url or "",
            "contractUrl": self.contract_url or "",
            "txUrl": self.tx_url or "",
        }

"""
Contract operation requests (mint, balance) for already deployed contracts
"""

from dataclasses import dataclass
from typing import Dict, Optional

from .token import TokenStandard


@dataclass(frozen=True)
class ContractTarget:
    """Identifies a deployed contract by address and its build artifact"""
    contract_address: str
    contract_file_name: str  # Must match the backend's artifact path
    contract_name: str
    token_type: TokenStandard

    def to_payload(self) -> Dict:
        return {
            "contractAddress": self.contract_address,
            "contractFileName": self.contract_file_name,
            "contractName": self.contract_name,
            "tokenType": self.token_type.value,
        }


@dataclass(frozen=True)
class MintRequest:
    target: ContractTarget
    to: str
    token_id: Optional[int] = None  # ERC1155 only
    amount: Optional[int] = None  # ERC1155 only

    def to_payload(self) -> Dict:
        payload = self.target.to_payload()
        payload["to"] = self.to
        if self.token_id is not None:
            payload["id"] = self.token_id
        if self.amount is not None:
            payload["amount"] = self.amount
        return payload


@dataclass(frozen=True)
class BalanceRequest:
    target: ContractTarget
    wallet: str
    token_id: Optional[int] = None  # ERC1155 only

    def to_payload(self) -> Dict:
        payload = self.target.to_payload()
        payload["wallet"] = self.wallet
        if self.token_id is not None:
            payload["id"] = self.token_id
        return payload

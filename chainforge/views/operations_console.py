"""
Contract operations console: mint and balance checks on deployed contracts
"""

import logging
from typing import Any, Dict, Optional

from ..errors import TransportError
from ..services import build_balance, build_mint

logger = logging.getLogger('chainforge')


class OperationsConsole:
    """Form state for minting and balance inspection"""

    def __init__(self, client):
        self.client = client
        self.fields: Dict[str, Any] = {"tokenType": "ERC20"}
        self.busy = False
        self.mint_status = ""
        self.balance: Optional[str] = None

    def set_field(self, name: str, value):
        self.fields[name] = value
        if name == "tokenType":
            # Switching standards clears results from the previous contract
            self.mint_status = ""
            self.balance = None

    @property
    def can_mint(self) -> bool:
        return build_mint(self.fields).ok

    @property
    def can_check_balance(self) -> bool:
        return build_balance(self.fields).ok

    async def mint(self) -> Optional[str]:
        if self.busy:
            return None
        result = build_mint(self.fields)
        if not result.ok:
            self.mint_status = "\n".join(result.messages)
            return None

        self.busy = True
        self.mint_status = "Submitting transaction..."
        try:
            tx_hash = await self.client.mint(result.request)
        except TransportError as e:
            logger.error(f"Mint failed: {e.message}")
            self.mint_status = e.message
            return None
        finally:
            self.busy = False

        self.mint_status = f"Mint successful. Transaction hash: {tx_hash or 'unknown'}"
        return tx_hash

    async def check_balance(self) -> Optional[str]:
        if self.busy:
            return None
        result = build_balance(self.fields)
        if not result.ok:
            self.balance = "\n".join(result.messages)
            return None

        self.busy = True
        try:
            self.balance = await self.client.balance(result.request)
        except TransportError as e:
            logger.error(f"Balance check failed: {e.message}")
            self.balance = e.message
            return None
        finally:
            self.busy = False
        return self.balance

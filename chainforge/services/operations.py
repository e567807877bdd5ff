"""
Mint and balance request building for deployed contracts
"""

from typing import Any, Mapping, Optional

from web3 import Web3

from ..errors import ValidationError
from ..models import BalanceRequest, ContractTarget, MintRequest, TokenStandard
from .coercion import clean_text, parse_integer, parse_standard
from .request_builder import BuildResult


def _address(raw: Any, field_name: str, label: str, errors) -> Optional[str]:
    text = clean_text(raw)
    if text is None:
        errors.append(ValidationError(field_name, "missing", f"{label} is required."))
        return None
    if not Web3.is_address(text):
        errors.append(ValidationError(field_name, "invalid", f"{label} is not a valid address."))
        return None
    return Web3.to_checksum_address(text)


def _required_text(raw: Any, field_name: str, label: str, errors) -> Optional[str]:
    text = clean_text(raw)
    if text is None:
        errors.append(ValidationError(field_name, "missing", f"{label} is required."))
    return text


def _whole_number(raw: Any, field_name: str, label: str, minimum: int, errors) -> Optional[int]:
    try:
        value = parse_integer(raw)
    except ValueError:
        errors.append(ValidationError(field_name, "invalid", f"{label} must be a whole number."))
        return None
    if value is None:
        errors.append(ValidationError(field_name, "missing", f"{label} is required for ERC1155."))
        return None
    if value < minimum:
        errors.append(ValidationError(field_name, "out_of_range", f"{label} must be at least {minimum}."))
        return None
    return value


def _target(fields: Mapping, errors) -> Optional[ContractTarget]:
    try:
        standard = parse_standard(fields.get("tokenType") or "ERC20")
    except ValueError:
        errors.append(ValidationError("tokenType", "invalid", "Token type must be ERC20, ERC721 or ERC1155."))
        standard = None

    address = _address(fields.get("contractAddress"), "contractAddress", "Contract address", errors)
    file_name = _required_text(fields.get("contractFileName"), "contractFileName", "Contract file name", errors)
    name = _required_text(fields.get("contractName"), "contractName", "Contract name", errors)

    if None in (standard, address, file_name, name):
        return None
    return ContractTarget(address, file_name, name, standard)


def build_mint(fields: Mapping) -> BuildResult:
    """ERC20 contracts are deployed with a fixed supply, so minting is refused"""
    errors = []
    target = _target(fields, errors)
    to = _address(fields.get("to") or fields.get("wallet"), "to", "Wallet address", errors)

    token_id = amount = None
    if target is not None and target.token_type is TokenStandard.ERC20:
        errors.append(ValidationError(
            "tokenType", "not_allowed", "ERC20 tokens are deployed with fixed supply. Minting is disabled."
        ))
    elif target is not None and target.token_type is TokenStandard.ERC1155:
        token_id = _whole_number(fields.get("id"), "id", "Token ID", 0, errors)
        amount = _whole_number(fields.get("amount"), "amount", "Amount", 1, errors)

    if errors:
        return BuildResult(errors=tuple(errors))
    return BuildResult(request=MintRequest(target=target, to=to, token_id=token_id, amount=amount))


def build_balance(fields: Mapping) -> BuildResult:
    errors = []
    target = _target(fields, errors)
    wallet = _address(fields.get("wallet"), "wallet", "Wallet address", errors)

    token_id = None
    if target is not None and target.token_type is TokenStandard.ERC1155:
        token_id = _whole_number(fields.get("id"), "id", "Token ID", 0, errors)

    if errors:
        return BuildResult(errors=tuple(errors))
    return BuildResult(request=BalanceRequest(target=target, wallet=wallet, token_id=token_id))

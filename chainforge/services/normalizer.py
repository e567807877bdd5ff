"""
Deployment record normalizer
The only place where missing backend fields are defaulted
"""

from datetime import datetime
from typing import Any, Iterable, List, Mapping, Optional, Union

from ..models import UNKNOWN, DeploymentRecord, DisplayRow
from .verification import parse_status

# Closed lookup: an unlisted network gets no link rather than a guessed one
EXPLORER_BASES = {
    "mainnet": "https://etherscan.io",
    "sepolia": "https://sepolia.etherscan.io",
    "goerli": "https://goerli.etherscan.io",
    "holesky": "https://holesky.etherscan.io",
}

PLACEHOLDER = "-"


def explorer_base(network: Optional[str]) -> Optional[str]:
    """Public explorer root for a network name, case-insensitive"""
    if not network:
        return None
    return EXPLORER_BASES.get(network.strip().lower())


def shorten(value: Optional[str]) -> str:
    """0x1234…abcd for long identifiers, verbatim for short ones"""
    if not value or not isinstance(value, str) or value == UNKNOWN:
        return PLACEHOLDER
    if len(value) <= 12:
        return value
    return f"{value[:6]}…{value[-4:]}"


def format_timestamp(value: Optional[str]) -> str:
    """Human readable deployment time, '-' when missing or unparseable"""
    if not value or value == UNKNOWN:
        return PLACEHOLDER
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return PLACEHOLDER
    return parsed.strftime("%b %d %Y %H:%M")


def _text(value: Any) -> str:
    if value is None:
        return UNKNOWN
    text = value if isinstance(value, str) else str(value)
    return text.strip() or UNKNOWN


def _identifier(value: Any) -> Optional[str]:
    text = _text(value)
    return None if text == UNKNOWN else text


def _url(value: Any) -> Optional[str]:
    text = _identifier(value)
    if text and text.startswith(("http://", "https://")):
        return text
    return None


def normalize(record: Union[DeploymentRecord, Mapping]) -> DisplayRow:
    """Project a backend record into a display row with explorer links"""
    if not isinstance(record, DeploymentRecord):
        record = DeploymentRecord.from_payload(record)

    network = _text(record.network)
    base = explorer_base(_identifier(network))
    contract_address = _identifier(record.contract_address)
    tx_hash = _identifier(record.tx_hash)

    return DisplayRow(
        record_id=_text(record.record_id),
        token_name=_text(record.token_name),
        token_type=_text(record.token_type),
        network=network,
        contract_address=contract_address or UNKNOWN,
        tx_hash=tx_hash or UNKNOWN,
        deployed_at=_text(record.deployed_at),
        verification_status=parse_status(record.verification_status),
        verification_message=_text(record.verification_message),
        explorer_url=_url(record.explorer_url),
        contract_url=f"{base}/address/{contract_address}" if base and contract_address else None,
        tx_url=f"{base}/tx/{tx_hash}" if base and tx_hash else None,
    )


def normalize_all(records: Iterable) -> List[DisplayRow]:
    return [normalize(record) for record in records]

"""
Field coercion for raw operator input
Turns strings and checkbox values into typed values or raises ValueError
"""

import re
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from ..models import MODULE_VOCABULARY, ConsensusType, TokenStandard

_INTEGER_RE = re.compile(r"^[+-]?\d+$")
_MODULE_LOOKUP = {name.lower(): name for name in MODULE_VOCABULARY}

_TRUE_VALUES = ("1", "true", "yes", "on", "y")
_FALSE_VALUES = ("0", "false", "no", "off", "n", "")


def clean_text(value: Any) -> Optional[str]:
    """Trim a text value. Whitespace-only and None count as absent."""
    if value is None:
        return None
    text = value if isinstance(value, str) else str(value)
    text = text.strip()
    return text or None


def parse_integer(value: Any) -> Optional[int]:
    """Strict integer parse. Returns None for absent input, raises ValueError otherwise."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"not a number: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise ValueError(f"not a whole number: {value!r}")

    text = clean_text(value)
    if text is None:
        return None
    if not _INTEGER_RE.match(text):
        raise ValueError(f"not a whole number: {text!r}")
    return int(text)


def parse_bool(value: Any) -> bool:
    """Checkbox-style boolean"""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    lowered = str(value).strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"not a boolean: {value!r}")


def parse_standard(value: Any) -> TokenStandard:
    """Accepts ERC20, erc-20, TokenStandard.ERC20 and so on"""
    if isinstance(value, TokenStandard):
        return value
    text = (clean_text(value) or "").upper().replace("-", "").replace(" ", "")
    try:
        return TokenStandard(text)
    except ValueError:
        raise ValueError(f"unknown token standard: {value!r}")


def parse_consensus(value: Any) -> ConsensusType:
    """Accepts the enum value, its display label or the poa/pos shorthand"""
    if isinstance(value, ConsensusType):
        return value
    text = clean_text(value)
    if text is None:
        return ConsensusType.PROOF_OF_AUTHORITY

    key = text.lower().replace(" ", "").replace("-", "").replace("_", "")
    if key in ("proofofauthority", "poa"):
        return ConsensusType.PROOF_OF_AUTHORITY
    if key in ("proofofstake", "pos"):
        return ConsensusType.PROOF_OF_STAKE
    raise ValueError(f"unknown consensus type: {value!r}")


def canonical_module(name: Any) -> Optional[str]:
    """Vocabulary spelling of a module name, or None if it is not a known module"""
    text = clean_text(name)
    if text is None:
        return None
    return _MODULE_LOOKUP.get(text.lower())


def parse_module_selection(selection: Any) -> Tuple[List[str], List[str]]:
    """
    Read a module selection in any of the shapes the console produces:
    a mapping of name -> checkbox value, an iterable of names, or a
    comma-separated string.

    Returns (selected vocabulary names, unrecognized names), both in input order.
    """
    if selection is None:
        return [], []

    if isinstance(selection, Mapping):
        names: Iterable = [name for name, checked in selection.items() if parse_bool(checked)]
    elif isinstance(selection, str):
        names = selection.split(",")
    else:
        names = selection

    selected, unknown = [], []
    for raw in names:
        text = clean_text(raw)
        if text is None:
            continue
        module = canonical_module(text)
        if module is None:
            if text not in unknown:
                unknown.append(text)
        elif module not in selected:
            selected.append(module)
    return selected, unknown

"""
Per-standard policy table
Which fields each token standard requires, accepts or ignores, and which modules it allows
"""

from typing import Dict, FrozenSet, Iterable

from ..errors import ConfigurationError, PolicyError
from ..models import MODULE_VOCABULARY, TokenStandard

# Field names as they appear in raw input and in the outgoing payload
NAME = "name"
SYMBOL = "symbol"
INITIAL_SUPPLY = "initialSupply"
DECIMALS = "decimals"
BASE_URI = "baseURI"

ALL_FIELDS = frozenset({NAME, SYMBOL, INITIAL_SUPPLY, DECIMALS, BASE_URI})

_REQUIRED = {
    TokenStandard.ERC20: frozenset({NAME, SYMBOL, INITIAL_SUPPLY, DECIMALS}),
    TokenStandard.ERC721: frozenset({NAME, SYMBOL}),
    TokenStandard.ERC1155: frozenset({NAME, BASE_URI}),
}

_OPTIONAL = {
    TokenStandard.ERC20: frozenset(),
    TokenStandard.ERC721: frozenset({BASE_URI}),
    TokenStandard.ERC1155: frozenset({SYMBOL}),
}

# field -> module whose selection makes the field required
_CONDITIONAL = {
    TokenStandard.ERC20: {},
    TokenStandard.ERC721: {BASE_URI: "metadata"},
    TokenStandard.ERC1155: {},
}

_STANDARD_MODULES = {
    TokenStandard.ERC20: frozenset({
        "mintable", "burnable", "pausable", "governance",
        "accessControl", "ownable", "tokenTransfer",
    }),
    TokenStandard.ERC721: frozenset({
        "mintable", "burnable", "pausable", "governance",
        "accessControl", "ownable", "tokenTransfer", "metadata",
    }),
    TokenStandard.ERC1155: frozenset({
        "mintable", "burnable", "pausable",
        "accessControl", "ownable", "tokenTransfer", "metadata",
    }),
}


class StandardPolicy:
    """
    Rule table for the three token standards.

    Two configuration points, one variant active at a time:
    - erc1155_symbol: "optional" (default) or "required"
    - module_scope: "standard" (per-standard module table, default) or
      "uniform" (every vocabulary module allowed for every standard)
    """

    def __init__(self, erc1155_symbol: str = "optional", module_scope: str = "standard"):
        if erc1155_symbol not in ("optional", "required"):
            raise ConfigurationError(f"Unknown ERC1155 symbol policy: {erc1155_symbol!r}")
        if module_scope not in ("standard", "uniform"):
            raise ConfigurationError(f"Unknown module scope: {module_scope!r}")
        self.erc1155_symbol = erc1155_symbol
        self.module_scope = module_scope

    @classmethod
    def from_config(cls, config) -> "StandardPolicy":
        return cls(erc1155_symbol=config.erc1155_symbol, module_scope=config.module_scope)

    def _check(self, standard) -> TokenStandard:
        if not isinstance(standard, TokenStandard) or standard not in _REQUIRED:
            raise PolicyError(f"No policy defined for token standard {standard!r}")
        return standard

    def required_fields(self, standard: TokenStandard, modules: Iterable[str] = ()) -> FrozenSet[str]:
        """Mandatory fields, including those made mandatory by the selected modules"""
        standard = self._check(standard)
        required = set(_REQUIRED[standard])
        if standard is TokenStandard.ERC1155 and self.erc1155_symbol == "required":
            required.add(SYMBOL)

        selected = set(modules)
        for field_name, module in _CONDITIONAL[standard].items():
            if module in selected:
                required.add(field_name)
        return frozenset(required)

    def optional_fields(self, standard: TokenStandard) -> FrozenSet[str]:
        standard = self._check(standard)
        optional = set(_OPTIONAL[standard])
        if standard is TokenStandard.ERC1155 and self.erc1155_symbol == "required":
            optional.discard(SYMBOL)
        return frozenset(optional)

    def conditional_fields(self, standard: TokenStandard) -> Dict[str, str]:
        """field -> module that makes it required"""
        return dict(_CONDITIONAL[self._check(standard)])

    def accepted_fields(self, standard: TokenStandard) -> FrozenSet[str]:
        return self.required_fields(standard) | self.optional_fields(standard)

    def disallowed_fields(self, standard: TokenStandard) -> FrozenSet[str]:
        return ALL_FIELDS - self.accepted_fields(standard)

    def allowed_modules(self, standard: TokenStandard) -> FrozenSet[str]:
        standard = self._check(standard)
        if self.module_scope == "uniform":
            return frozenset(MODULE_VOCABULARY)
        return _STANDARD_MODULES[standard]

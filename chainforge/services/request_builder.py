"""
Request builder
Validates raw operator input against the standard policy and produces an immutable request
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from ..errors import ValidationError
from ..models import MODULE_VOCABULARY, ChainScaffoldRequest, TokenDeploymentRequest, TokenStandard
from .coercion import clean_text, parse_consensus, parse_integer, parse_module_selection
from .policy import BASE_URI, DECIMALS, INITIAL_SUPPLY, NAME, SYMBOL, StandardPolicy

logger = logging.getLogger('chainforge')

FIELD_ORDER = (NAME, SYMBOL, INITIAL_SUPPLY, DECIMALS, BASE_URI)

FIELD_LABELS = {
    NAME: "Token name",
    SYMBOL: "Token symbol",
    INITIAL_SUPPLY: "Initial supply",
    DECIMALS: "Decimals",
    BASE_URI: "Base URI",
}

# Spellings accepted in raw input besides the payload name
_FIELD_ALIASES = {
    NAME: ("tokenName", "token_name"),
    SYMBOL: ("tokenSymbol", "token_symbol"),
    INITIAL_SUPPLY: ("initial_supply", "supply"),
    DECIMALS: (),
    BASE_URI: ("base_uri", "baseUri"),
}

MAX_DECIMALS = 255  # uint8 on chain


@dataclass(frozen=True)
class BuildResult:
    """Either a validated request or every validation problem found"""
    request: Optional[Any] = None
    errors: Tuple[ValidationError, ...] = ()

    @property
    def ok(self) -> bool:
        return self.request is not None and not self.errors

    @property
    def messages(self) -> Tuple[str, ...]:
        return tuple(error.message for error in self.errors)


def _read_raw(raw_fields: Optional[Mapping], field_name: str, aliases=()) -> Any:
    if not raw_fields:
        return None
    if raw_fields.get(field_name) is not None:
        return raw_fields.get(field_name)
    for alias in aliases:
        if raw_fields.get(alias) is not None:
            return raw_fields.get(alias)
    return None


class RequestBuilder:
    """Builds token deployment and chain scaffold requests. Pure, no I/O."""

    def __init__(self, policy: Optional[StandardPolicy] = None):
        self.policy = policy or StandardPolicy()

    def _modules(self, module_selection, allowed, standard_label: str, errors):
        try:
            selected, unknown = parse_module_selection(module_selection)
        except ValueError as e:
            errors.append(ValidationError("modules", "invalid", f"Module selection is invalid: {e}"))
            return frozenset()

        for name in unknown:
            errors.append(ValidationError("modules", "unknown", f"Unknown module: {name}."))
        for name in selected:
            if name not in allowed:
                errors.append(ValidationError(
                    "modules", "not_allowed",
                    f"The {name} module is not available for {standard_label}."
                ))
        return frozenset(selected)

    def build(self, standard: TokenStandard, raw_fields: Optional[Mapping] = None,
              module_selection: Any = None) -> BuildResult:
        """Validate a token deployment. Collects all problems instead of stopping at the first."""
        allowed_modules = self.policy.allowed_modules(standard)
        errors = []

        modules = self._modules(module_selection, allowed_modules, standard.value, errors)
        required = self.policy.required_fields(standard, modules)
        accepted = self.policy.accepted_fields(standard) | required

        values: Dict[str, Any] = {}
        for field_name in FIELD_ORDER:
            raw = _read_raw(raw_fields, field_name, _FIELD_ALIASES[field_name])
            label = FIELD_LABELS[field_name]

            if field_name not in accepted:
                if clean_text(raw) is not None:
                    logger.debug(f"Ignoring {field_name} for {standard.value}")
                continue

            if field_name in (INITIAL_SUPPLY, DECIMALS):
                try:
                    value = parse_integer(raw)
                except ValueError:
                    errors.append(ValidationError(field_name, "invalid", f"{label} must be a whole number."))
                    continue
                if value is not None:
                    if field_name == INITIAL_SUPPLY and value <= 0:
                        errors.append(ValidationError(
                            field_name, "out_of_range",
                            f"{standard.value} initial supply must be a positive number."
                        ))
                        continue
                    if field_name == DECIMALS and not 0 <= value <= MAX_DECIMALS:
                        errors.append(ValidationError(
                            field_name, "out_of_range",
                            f"{standard.value} decimals must be between 0 and {MAX_DECIMALS}."
                        ))
                        continue
            else:
                value = clean_text(raw)

            if value is None:
                if field_name in required:
                    errors.append(ValidationError(
                        field_name, "missing", f"{label} is required for {standard.value}."
                    ))
                continue
            values[field_name] = value

        if errors:
            return BuildResult(errors=tuple(errors))

        request = TokenDeploymentRequest(
            standard=standard,
            name=values[NAME],
            symbol=values.get(SYMBOL),
            initial_supply=values.get(INITIAL_SUPPLY),
            decimals=values.get(DECIMALS),
            base_uri=values.get(BASE_URI),
            modules=modules,
        )
        return BuildResult(request=request)

    def build_scaffold(self, raw_fields: Optional[Mapping] = None,
                       module_selection: Any = None) -> BuildResult:
        """Validate a chain scaffold request"""
        errors = []
        modules = self._modules(module_selection, frozenset(MODULE_VOCABULARY), "chain scaffolds", errors)

        project_name = clean_text(_read_raw(raw_fields, "projectName", ("chainName", "project_name", "name")))
        if project_name is None:
            errors.append(ValidationError("projectName", "missing", "Project name is required."))

        try:
            consensus = parse_consensus(_read_raw(raw_fields, "consensusType", ("consensus",)))
        except ValueError:
            consensus = None
            errors.append(ValidationError(
                "consensusType", "invalid", "Consensus must be Proof of Authority or Proof of Stake."
            ))

        if errors:
            return BuildResult(errors=tuple(errors))

        return BuildResult(request=ChainScaffoldRequest(
            project_name=project_name,
            consensus_type=consensus,
            modules=modules,
        ))

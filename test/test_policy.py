import pytest

from chainforge.errors import ConfigurationError, PolicyError
from chainforge.models import MODULE_VOCABULARY, TokenStandard
from chainforge.services import StandardPolicy


def test_required_fields_table():
    policy = StandardPolicy()
    assert policy.required_fields(TokenStandard.ERC20) == {"name", "symbol", "initialSupply", "decimals"}
    assert policy.required_fields(TokenStandard.ERC721) == {"name", "symbol"}
    assert policy.required_fields(TokenStandard.ERC1155) == {"name", "baseURI"}


def test_disallowed_fields_table():
    policy = StandardPolicy()
    assert policy.disallowed_fields(TokenStandard.ERC20) == {"baseURI"}
    assert policy.disallowed_fields(TokenStandard.ERC721) == {"initialSupply", "decimals"}
    assert policy.disallowed_fields(TokenStandard.ERC1155) == {"initialSupply", "decimals"}


def test_conditional_base_uri_for_erc721():
    policy = StandardPolicy()
    assert policy.conditional_fields(TokenStandard.ERC721) == {"baseURI": "metadata"}
    assert "baseURI" in policy.required_fields(TokenStandard.ERC721, ["metadata"])


def test_strict_symbol_variant_moves_symbol_to_required():
    policy = StandardPolicy(erc1155_symbol="required")
    assert "symbol" in policy.required_fields(TokenStandard.ERC1155)
    assert "symbol" not in policy.optional_fields(TokenStandard.ERC1155)


def test_allowed_modules_per_standard():
    policy = StandardPolicy()
    assert "governance" not in policy.allowed_modules(TokenStandard.ERC1155)
    assert "metadata" not in policy.allowed_modules(TokenStandard.ERC20)
    for standard in TokenStandard:
        assert policy.allowed_modules(standard) <= set(MODULE_VOCABULARY)


def test_uniform_scope():
    policy = StandardPolicy(module_scope="uniform")
    for standard in TokenStandard:
        assert policy.allowed_modules(standard) == set(MODULE_VOCABULARY)


def test_unknown_standard_raises():
    with pytest.raises(PolicyError):
        StandardPolicy().required_fields("ERC777")


def test_invalid_variants_rejected():
    with pytest.raises(ConfigurationError):
        StandardPolicy(erc1155_symbol="sometimes")
    with pytest.raises(ConfigurationError):
        StandardPolicy(module_scope="global")

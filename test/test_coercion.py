import pytest

from chainforge.models import ConsensusType, TokenStandard
from chainforge.services.coercion import (
    canonical_module,
    clean_text,
    parse_bool,
    parse_consensus,
    parse_integer,
    parse_module_selection,
    parse_standard,
)


def test_clean_text():
    assert clean_text("  Impact ") == "Impact"
    assert clean_text("   ") is None
    assert clean_text(None) is None
    assert clean_text(42) == "42"


def test_parse_integer_accepts_whole_numbers():
    assert parse_integer("1000") == 1000
    assert parse_integer(" -5 ") == -5
    assert parse_integer(7) == 7
    assert parse_integer(3.0) == 3
    assert parse_integer("") is None
    assert parse_integer(None) is None


@pytest.mark.parametrize("value", ["abc", "1.5", "1e3", "0x10", True, 2.5])
def test_parse_integer_rejects(value):
    with pytest.raises(ValueError):
        parse_integer(value)


def test_parse_bool():
    assert parse_bool("on") is True
    assert parse_bool("False") is False
    assert parse_bool(None) is False
    assert parse_bool(1) is True
    with pytest.raises(ValueError):
        parse_bool("maybe")


def test_parse_standard():
    assert parse_standard("erc-721") is TokenStandard.ERC721
    assert parse_standard(TokenStandard.ERC20) is TokenStandard.ERC20
    with pytest.raises(ValueError):
        parse_standard("ERC777")


def test_parse_consensus():
    assert parse_consensus("Proof of Authority") is ConsensusType.PROOF_OF_AUTHORITY
    assert parse_consensus("ProofOfStake") is ConsensusType.PROOF_OF_STAKE
    assert parse_consensus("pos") is ConsensusType.PROOF_OF_STAKE
    assert parse_consensus(None) is ConsensusType.PROOF_OF_AUTHORITY
    with pytest.raises(ValueError):
        parse_consensus("raft")


def test_canonical_module_ignores_case():
    assert canonical_module("ACCESSCONTROL") == "accessControl"
    assert canonical_module("teleport") is None


def test_module_selection_shapes():
    assert parse_module_selection({"mintable": True, "burnable": False}) == (["mintable"], [])
    assert parse_module_selection(["pausable", "Mintable", "pausable"]) == (["pausable", "mintable"], [])
    assert parse_module_selection("mintable, teleport") == (["mintable"], ["teleport"])
    assert parse_module_selection(None) == ([], [])

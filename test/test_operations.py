"""
Mint and balance request building
"""

import asyncio

from web3 import Web3

from chainforge.models import TokenStandard
from chainforge.services import build_balance, build_mint
from chainforge.views import OperationsConsole

CONTRACT = "0x" + "ab" * 20
WALLET = "0x" + "cd" * 20

TARGET = {
    "contractAddress": CONTRACT,
    "contractFileName": "ImpactNFT.sol",
    "contractName": "ImpactNFT",
}


def test_erc20_mint_is_refused():
    result = build_mint(dict(TARGET, tokenType="ERC20", to=WALLET))
    assert not result.ok
    assert result.messages == ("ERC20 tokens are deployed with fixed supply. Minting is disabled.",)


def test_erc721_mint_payload():
    result = build_mint(dict(TARGET, tokenType="ERC721", to=WALLET))
    assert result.ok
    assert result.request.to_payload() == {
        "contractAddress": Web3.to_checksum_address(CONTRACT),
        "contractFileName": "ImpactNFT.sol",
        "contractName": "ImpactNFT",
        "tokenType": "ERC721",
        "to": Web3.to_checksum_address(WALLET),
    }


def test_erc1155_mint_needs_id_and_amount():
    missing = build_mint(dict(TARGET, tokenType="ERC1155", to=WALLET))
    assert {error.field for error in missing.errors} == {"id", "amount"}

    zero_amount = build_mint(dict(TARGET, tokenType="ERC1155", to=WALLET, id="0", amount="0"))
    assert [error.code for error in zero_amount.errors] == ["out_of_range"]

    result = build_mint(dict(TARGET, tokenType="ERC1155", to=WALLET, id="0", amount="5"))
    assert result.ok
    assert result.request.token_id == 0
    assert result.request.amount == 5


def test_invalid_addresses_are_reported():
    result = build_mint(dict(TARGET, contractAddress="0x123", tokenType="ERC721", to="nobody"))
    assert {error.field for error in result.errors} == {"contractAddress", "to"}


def test_balance_for_erc1155_needs_id():
    assert not build_balance(dict(TARGET, tokenType="ERC1155", wallet=WALLET)).ok

    result = build_balance(dict(TARGET, tokenType="ERC1155", wallet=WALLET, id="3"))
    assert result.ok
    assert result.request.target.token_type is TokenStandard.ERC1155
    assert result.request.to_payload()["id"] == 3


def test_console_mint_and_balance(backend):
    console = OperationsConsole(backend)
    for name, value in dict(TARGET, tokenType="ERC721", to=WALLET, wallet=WALLET).items():
        console.set_field(name, value)

    assert console.can_mint
    tx_hash = asyncio.run(console.mint())
    assert console.mint_status == f"Mint successful. Transaction hash: {tx_hash}"

    assert asyncio.run(console.check_balance()) == "42"
    assert backend.count("mint") == 1
    assert backend.count("balance") == 1


def test_console_switching_standard_clears_results(backend):
    console = OperationsConsole(backend)
    console.balance = "42"
    console.mint_status = "Mint successful."
    console.set_field("tokenType", "ERC1155")
    assert console.balance is None
    assert console.mint_status == ""

import asyncio
import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from chainforge.errors import TransportError
from chainforge.models import DeploymentRecord, ScaffoldResult, TokenDeploymentResult
from chainforge.services import ActivityLedger, RequestBuilder, StandardPolicy


class FakeBackend:
    """Stands in for BackendClient; records every call"""

    def __init__(self, records=None):
        self.records = [DeploymentRecord.from_payload(r) for r in (records or [])]
        self.calls = []
        self.fail = {}  # method name -> TransportError to raise
        self.on_verify = None  # optional callback run while a verify call is in flight
        self.gate = None  # optional asyncio.Event a list call waits on

    def _maybe_fail(self, name):
        if name in self.fail:
            raise self.fail[name]

    async def create_token(self, request):
        self.calls.append(("create_token", request))
        await asyncio.sleep(0)
        self._maybe_fail("create_token")
        return TokenDeploymentResult(
            message="Deployment completed successfully.",
            contract_address="0x" + "ab" * 20,
            tx_hash="0x" + "cd" * 32,
            network="sepolia",
        )

    async def create_chain(self, request):
        self.calls.append(("create_chain", request))
        await asyncio.sleep(0)
        self._maybe_fail("create_chain")
        return ScaffoldResult(message="Chain scaffold generated.", path=f"chains/{request.project_name}")

    async def list_deployments(self):
        self.calls.append(("list_deployments", None))
        if self.gate is not None:
            await self.gate.wait()
        await asyncio.sleep(0)
        self._maybe_fail("list_deployments")
        return list(self.records)

    async def verify_contract(self, deployment_file):
        self.calls.append(("verify_contract", deployment_file))
        if self.on_verify is not None:
            self.on_verify(deployment_file)
        await asyncio.sleep(0)
        self._maybe_fail("verify_contract")
        return {"message": "Verification submitted"}

    async def mint(self, request):
        self.calls.append(("mint", request))
        await asyncio.sleep(0)
        self._maybe_fail("mint")
        return "0x" + "ef" * 32

    async def balance(self, request):
        self.calls.append(("balance", request))
        await asyncio.sleep(0)
        self._maybe_fail("balance")
        return "42"

    def count(self, name):
        return sum(1 for call, _ in self.calls if call == name)


SAMPLE_RECORDS = [
    {
        "file": "ImpactNFT_ERC721_1700000000.json",
        "tokenName": "Impact",
        "tokenType": "ERC721",
        "network": "sepolia",
        "contractAddress": "0xABCDEF0123456789ABCDEF0123456789ABCDEF01",
        "txHash": "0x" + "12" * 32,
        "deployedAt": "2024-05-01T12:30:00Z",
        "verificationStatus": "failed",
        "verificationMessage": "Bytecode mismatch",
    },
    {
        "file": "LabToken_ERC20_1700000001.json",
        "token": {"tokenName": "Lab Token"},
        "tokenType": "ERC20",
        "network": "mainnet",
        "contractAddress": "0x" + "34" * 20,
        "txHash": "0x" + "56" * 32,
        "deployedAt": "2024-05-02T08:00:00Z",
        "verificationStatus": "verified",
        "etherscanUrl": "https://etherscan.io/address/0x" + "34" * 20 + "#code",
    },
]


@pytest.fixture
def backend():
    return FakeBackend(SAMPLE_RECORDS)


@pytest.fixture
def builder():
    return RequestBuilder(StandardPolicy())


@pytest.fixture
def ledger():
    return ActivityLedger(limit=10)


@pytest.fixture
def transport_error():
    return TransportError("Verification request failed.", status=500)

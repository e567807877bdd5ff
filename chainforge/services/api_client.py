"""
Backend HTTP clients
Async client (aiohttp) for the operator bot, sync client (requests) for scripts
"""

import asyncio
import json
import logging
from typing import Any, Dict, List, Optional

import aiohttp
import requests

from ..errors import ConfigurationError, TransportError
from ..models import (
    BalanceRequest,
    ChainScaffoldRequest,
    DeploymentRecord,
    MintRequest,
    ScaffoldResult,
    TokenDeploymentRequest,
    TokenDeploymentResult,
)

logger = logging.getLogger('chainforge')

CREATE_TOKEN_PATH = "/create-token"
CREATE_CHAIN_PATH = "/create-chain"
DEPLOYMENTS_PATH = "/deployments"
VERIFY_PATH = "/verify-contract"
MINT_PATH = "/mint"
BALANCE_PATH = "/balance"

# Shown when the backend gives no message of its own
FAILURE_MESSAGES = {
    CREATE_TOKEN_PATH: "Token deployment failed.",
    CREATE_CHAIN_PATH: "Scaffold generation failed.",
    DEPLOYMENTS_PATH: "Unable to load deployment history.",
    VERIFY_PATH: "Verification request failed.",
    MINT_PATH: "Mint operation failed.",
    BALANCE_PATH: "Unable to fetch balance.",
}


def error_message(body: Optional[str], fallback: str) -> str:
    """Prefer the body's `message` (or `error`) over a generic failure string"""
    if not body:
        return fallback
    try:
        data = json.loads(body)
    except ValueError:
        return fallback
    if isinstance(data, dict):
        for key in ("message", "error"):
            value = data.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return fallback


def _decode(body: Optional[str]) -> Dict[str, Any]:
    if not body:
        return {}
    try:
        data = json.loads(body)
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def _optional(data: Dict, *keys) -> Optional[str]:
    for key in keys:
        value = data.get(key)
        if value not in (None, ""):
            return str(value)
    return None


def parse_token_result(data: Dict) -> TokenDeploymentResult:
    return TokenDeploymentResult(
        message=_optional(data, "message") or "Deployment completed successfully.",
        contract_address=_optional(data, "contractAddress", "address"),
        tx_hash=_optional(data, "txHash"),
        network=_optional(data, "network"),
        download=_optional(data, "download"),
    )


def parse_scaffold_result(data: Dict) -> ScaffoldResult:
    return ScaffoldResult(
        message=_optional(data, "message") or "Chain scaffold generated.",
        path=_optional(data, "path"),
        download=_optional(data, "download"),
    )


def parse_records(data: Dict) -> List[DeploymentRecord]:
    records = data.get("records")
    if not isinstance(records, list):
        return []
    return [DeploymentRecord.from_payload(item) for item in records]


def _require_base_url(config) -> str:
    if not config.api_base_url:
        raise ConfigurationError("Backend API URL is not configured (set CHAINFORGE_API_URL)")
    return config.api_base_url


class BackendClient:
    """Async client for the deployment backend"""

    def __init__(self, config):
        self.base_url = _require_base_url(config)
        self.timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    async def _request(self, method: str, path: str, payload: Optional[Dict] = None) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        fallback = FAILURE_MESSAGES[path]
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.request(method, url, json=payload) as response:
                    body = await response.text(errors="replace")
                    if not 200 <= response.status < 300:
                        logger.error(f"{method} {path} failed: HTTP {response.status} {body[:200]}")
                        raise TransportError(error_message(body, fallback), status=response.status)
                    return _decode(body)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"{method} {path} failed: {e}")
            raise TransportError(fallback)

    async def create_token(self, request: TokenDeploymentRequest) -> TokenDeploymentResult:
        data = await self._request("POST", CREATE_TOKEN_PATH, request.to_payload())
        return parse_token_result(data)

    async def create_chain(self, request: ChainScaffoldRequest) -> ScaffoldResult:
        data = await self._request("POST", CREATE_CHAIN_PATH, request.to_payload())
        return parse_scaffold_result(data)

    async def list_deployments(self) -> List[DeploymentRecord]:
        data = await self._request("GET", DEPLOYMENTS_PATH)
        return parse_records(data)

    async def verify_contract(self, deployment_file: str) -> Dict[str, Any]:
        return await self._request("POST", VERIFY_PATH, {"deploymentFile": deployment_file})

    async def mint(self, request: MintRequest) -> Optional[str]:
        data = await self._request("POST", MINT_PATH, request.to_payload())
        return _optional(data, "txHash")

    async def balance(self, request: BalanceRequest) -> Optional[str]:
        data = await self._request("POST", BALANCE_PATH, request.to_payload())
        return _optional(data, "balance")


class SyncBackendClient:
    """Blocking client for command line tools"""

    def __init__(self, config):
        self.base_url = _require_base_url(config)
        self.timeout = config.request_timeout

    def _request(self, method: str, path: str, payload: Optional[Dict] = None) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        fallback = FAILURE_MESSAGES[path]
        try:
            if method == "GET":
                response = requests.get(url, timeout=self.timeout)
            else:
                response = requests.post(url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"{method} {path} failed: {e}")
            raise TransportError(fallback)

        if not 200 <= response.status_code < 300:
            logger.error(f"{method} {path} failed: HTTP {response.status_code} {response.text[:200]}")
            raise TransportError(error_message(response.text, fallback), status=response.status_code)
        return _decode(response.text)

    def list_deployments(self) -> List[DeploymentRecord]:
        return parse_records(self._request("GET", DEPLOYMENTS_PATH))

    def verify_contract(self, deployment_file: str) -> Dict[str, Any]:
        return self._request("POST", VERIFY_PATH, {"deploymentFile": deployment_file})

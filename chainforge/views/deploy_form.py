"""
Deploy form controller
Token deployment and chain scaffold submission with busy guards
"""

import logging
from typing import Any, Dict, Optional, Tuple

from ..errors import TransportError, ValidationError
from ..models import (
    MODULE_VOCABULARY,
    ActivityKind,
    ScaffoldResult,
    TokenDeploymentResult,
    TokenStandard,
)
from ..services import ActivityLedger, BuildResult, RequestBuilder
from ..services.coercion import canonical_module, parse_bool, parse_standard

logger = logging.getLogger('chainforge')


class DeployForm:
    """Holds raw form state and drives submissions to the backend"""

    def __init__(self, client, builder: RequestBuilder, ledger: ActivityLedger):
        self.client = client
        self.builder = builder
        self.ledger = ledger

        self.token_type = TokenStandard.ERC20
        self.token_fields: Dict[str, Any] = {}
        self.modules: Dict[str, bool] = {name: False for name in MODULE_VOCABULARY}
        self.chain_fields: Dict[str, Any] = {"consensusType": "Proof of Authority"}

        self.token_busy = False
        self.chain_busy = False

        self.response = ""
        self.errors: Tuple[ValidationError, ...] = ()
        self.token_result: Optional[TokenDeploymentResult] = None
        self.chain_result: Optional[ScaffoldResult] = None

    # Form state

    def set_token_type(self, value):
        self.token_type = parse_standard(value)

    def set_token_field(self, name: str, value):
        self.token_fields[name] = value

    def set_chain_field(self, name: str, value):
        self.chain_fields[name] = value

    def set_module(self, name: str, checked=True):
        """Unknown names are kept so the builder can report them"""
        self.modules[canonical_module(name) or name] = parse_bool(checked)

    def selected_modules(self):
        return [name for name, checked in self.modules.items() if checked]

    def reset_token_fields(self):
        self.token_fields = {}
        self.modules = {name: False for name in MODULE_VOCABULARY}

    def preview_token(self) -> BuildResult:
        return self.builder.build(self.token_type, self.token_fields, self.modules)

    # Submissions

    async def submit_token(self) -> Optional[TokenDeploymentResult]:
        """Validate and send the token deployment. A call while busy does nothing."""
        if self.token_busy:
            logger.debug("Token deployment already in flight, ignoring submit")
            return None

        result = self.preview_token()
        self.errors = result.errors
        if not result.ok:
            self.response = "\n".join(result.messages)
            return None

        request = result.request
        self.token_busy = True
        self.response = ""
        self.token_result = None

        try:
            deployed = await self.client.create_token(request)
        except TransportError as e:
            logger.error(f"Token deployment failed for {request.label}: {e.message}")
            self.response = e.message
            self.ledger.record_action(ActivityKind.TOKEN_DEPLOY, f"Deployment failed: {request.label}",
                                      succeeded=False)
            return None
        finally:
            self.token_busy = False

        self.token_result = deployed
        self.response = deployed.message
        self.ledger.record_action(ActivityKind.TOKEN_DEPLOY, f"Deployment completed: {request.label}")
        return deployed

    async def submit_chain(self) -> Optional[ScaffoldResult]:
        """Validate and send the chain scaffold request. A call while busy does nothing."""
        if self.chain_busy:
            logger.debug("Scaffold generation already in flight, ignoring submit")
            return None

        result = self.builder.build_scaffold(self.chain_fields, self.modules)
        self.errors = result.errors
        if not result.ok:
            self.response = "\n".join(result.messages)
            return None

        request = result.request
        self.chain_busy = True
        self.response = ""
        self.chain_result = None

        try:
            scaffold = await self.client.create_chain(request)
        except TransportError as e:
            logger.error(f"Scaffold generation failed for {request.project_name}: {e.message}")
            self.response = e.message
            self.ledger.record_action(ActivityKind.CHAIN_SCAFFOLD,
                                      f"Chain scaffold failed: {request.project_name}", succeeded=False)
            return None
        finally:
            self.chain_busy = False

        self.chain_result = scaffold
        self.response = scaffold.message
        self.ledger.record_action(ActivityKind.CHAIN_SCAFFOLD,
                                  f"Chain scaffold generated: {request.project_name}")
        return scaffold

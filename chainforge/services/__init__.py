from .policy import StandardPolicy
from .request_builder import BuildResult, RequestBuilder
from .verification import Affordance, AffordanceKind, affordance, can_trigger, parse_status, transition
from .normalizer import explorer_base, format_timestamp, normalize, normalize_all, shorten
from .ledger import ActivityLedger
from .api_client import BackendClient, SyncBackendClient
from .operations import build_balance, build_mint

"""
Deployment history view
The backend is the single source of truth: records are only ever replaced by a fresh fetch
"""

import logging
from dataclasses import replace
from typing import List, Optional, Set, Tuple

from ..errors import TransportError
from ..models import UNKNOWN, DeploymentRecord, DisplayRow, VerificationStatus
from ..services import can_trigger, normalize
from ..services.verification import can_transition, transition

logger = logging.getLogger('chainforge')

LOAD_FAILED = "Unable to load deployment history."


class DeploymentsPage:
    """Deployment ledger with the verification workflow"""

    def __init__(self, client, privacy_mode: bool = True):
        self.client = client
        self.privacy_mode = privacy_mode

        self.records: Tuple[DeploymentRecord, ...] = ()
        self.loading = False
        self.loaded = False
        self.error = ""
        self.alert = ""

        self._verifying: Set[str] = set()
        self._alive = True

    @property
    def alive(self) -> bool:
        return self._alive

    def close(self):
        """Results of requests still in flight are discarded after this"""
        self._alive = False

    def consume_alert(self) -> str:
        """The verify failure notice, handed out once"""
        alert, self.alert = self.alert, ""
        return alert

    def toggle_privacy(self) -> bool:
        self.privacy_mode = not self.privacy_mode
        return self.privacy_mode

    async def load(self) -> bool:
        """Fetch the full list. On failure the last successful list stays in place."""
        if not self._alive:
            return False

        self.loading = True
        self.error = ""
        try:
            records = await self.client.list_deployments()
        except TransportError as e:
            logger.error(f"[deployments] load failed: {e.message}")
            if self._alive:
                self.error = LOAD_FAILED
                self.loading = False
            return False

        if not self._alive:
            logger.debug("[deployments] view closed, discarding fetched records")
            return False

        self.records = tuple(records)
        self.loading = False
        self.loaded = True
        return True

    @property
    def rows(self) -> List[DisplayRow]:
        """Normalized rows. Rows with a verify call in flight show as submitting."""
        rows = []
        for record in self.records:
            row = normalize(record)
            if row.record_id in self._verifying:
                row = self._in_flight(row)
            rows.append(row)
        return rows

    def _in_flight(self, row: DisplayRow) -> DisplayRow:
        # A fetch during the call may already report a later state; that one wins
        if not can_transition(row.verification_status, VerificationStatus.SUBMITTING):
            logger.debug(f"[verify] {row.record_id} already {row.verification_status.value}, no overlay")
            return row
        return replace(row, verification_status=transition(row.verification_status, VerificationStatus.SUBMITTING))

    def find_row(self, record_id: str) -> Optional[DisplayRow]:
        for record in self.records:
            row = normalize(record)
            if row.record_id == record_id:
                return row
        return None

    def is_verifying(self, record_id: str) -> bool:
        return record_id in self._verifying

    async def verify(self, record_id: str) -> bool:
        """
        Trigger verification for one record, then re-fetch the list once.
        Returns False when the trigger was not issued (busy, unknown record
        or a state that offers no Verify/Retry action).
        """
        if not self._alive or record_id in self._verifying:
            return False

        row = self.find_row(record_id)
        if row is None or row.record_id == UNKNOWN or not can_trigger(row.verification_status):
            logger.debug(f"[verify] no action available for {record_id}")
            return False

        self._verifying.add(record_id)
        self.alert = ""
        try:
            await self.client.verify_contract(record_id)
        except TransportError as e:
            logger.error(f"[verify] failed for {record_id}: {e.message}")
            if self._alive:
                self.alert = e.message
        finally:
            self._verifying.discard(record_id)

        await self.load()
        return True

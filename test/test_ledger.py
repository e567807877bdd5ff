"""
Activity ledger ordering and cap
"""

import pytest

from chainforge.models import ActivityKind, ActivityLogEntry
from chainforge.services import ActivityLedger


def test_newest_first_and_capped():
    ledger = ActivityLedger(limit=3)
    for index in range(5):
        ledger.record_action(ActivityKind.TOKEN_DEPLOY, f"Deployment completed: Token{index} (ERC20)")

    labels = [entry.label for entry in ledger.entries()]
    assert len(ledger) == 3
    assert labels == [
        "Deployment completed: Token4 (ERC20)",
        "Deployment completed: Token3 (ERC20)",
        "Deployment completed: Token2 (ERC20)",
    ]


def test_failures_are_recorded_too(ledger):
    ledger.record_action(ActivityKind.CHAIN_SCAFFOLD, "Chain scaffold failed: LabChain", succeeded=False)
    entry = ledger.latest(1)[0]
    assert entry.kind is ActivityKind.CHAIN_SCAFFOLD
    assert entry.succeeded is False
    assert entry.timestamp


def test_record_returns_the_entry(ledger):
    entry = ActivityLogEntry(kind=ActivityKind.TOKEN_DEPLOY, label="Deployment completed: A (ERC20)")
    assert ledger.record(entry) is entry
    assert list(ledger) == [entry]


def test_default_limit():
    assert ActivityLedger().limit == 50


def test_limit_must_be_positive():
    with pytest.raises(ValueError):
        ActivityLedger(limit=0)

"""
Telegram message rendering (HTML parse mode)
Pure functions so the bot handlers stay thin
"""

import html
import shlex
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..errors import ValidationError
from ..models import UNKNOWN, ActivityLogEntry, DisplayRow, ScaffoldResult, TokenDeploymentResult, VerificationStatus
from ..services import AffordanceKind, affordance, format_timestamp, shorten

HIDDEN = "Hidden"
DIVIDER = "━━━━━━━━━━━━━━━━━━━━━━"

STATUS_EMOJI = {
    VerificationStatus.NOT_REQUESTED: "▫️",
    VerificationStatus.SUBMITTING: "🔄",
    VerificationStatus.PENDING: "⏳",
    VerificationStatus.VERIFIED: "✅",
    VerificationStatus.FAILED: "❌",
    VerificationStatus.RETRYABLE: "⚠️",
    VerificationStatus.UNKNOWN: "❔",
}

# (label, callback_data) pairs; the bot turns them into inline buttons
ButtonRow = List[Tuple[str, str]]


def esc(value) -> str:
    return html.escape(str(value), quote=True)


def parse_command_text(text: Optional[str]) -> Tuple[List[str], Dict[str, str]]:
    """
    Split '/token ERC721 name="Impact Token" symbol=IMP' style arguments
    into positional words and key=value pairs. Raises ValueError on bad quoting.
    """
    if not text:
        return [], {}
    positional, named = [], {}
    for word in shlex.split(text):
        if "=" in word:
            key, _, value = word.partition("=")
            named[key.strip()] = value
        else:
            positional.append(word)
    return positional, named


def render_errors(errors: Sequence[ValidationError]) -> str:
    lines = ["❌ <b>Please fix the following:</b>"]
    lines.extend(f"• {esc(error.message)}" for error in errors)
    return "\n".join(lines)


def _link(url: Optional[str], text: str) -> str:
    if not url:
        return esc(text)
    return f'<a href="{esc(url)}">{esc(text)}</a>'


def render_token_result(result: TokenDeploymentResult) -> str:
    lines = [f"🎉 <b>{esc(result.message)}</b>"]
    if result.contract_address:
        lines.append(f"📍 Contract: <code>{esc(result.contract_address)}</code>")
    if result.tx_hash:
        lines.append(f"🔗 Transaction: <code>{esc(result.tx_hash)}</code>")
    if result.network:
        lines.append(f"🌐 Network: {esc(result.network)}")
    if result.download:
        lines.append(f"📦 Download: {esc(result.download)}")
    return "\n".join(lines)


def render_scaffold_result(result: ScaffoldResult) -> str:
    lines = [f"🧱 <b>{esc(result.message)}</b>"]
    if result.path:
        lines.append(f"📁 Path: <code>{esc(result.path)}</code>")
    if result.download:
        lines.append(f"📦 Download: {esc(result.download)}")
    return "\n".join(lines)


def render_identifier(value: str, url: Optional[str], privacy_mode: bool) -> str:
    """Privacy mode hides identifiers in the view only"""
    if privacy_mode:
        return HIDDEN
    if value == UNKNOWN:
        return "-"
    return _link(url, shorten(value))


def render_verification(row: DisplayRow) -> str:
    action = affordance(row.verification_status)
    emoji = STATUS_EMOJI[row.verification_status]
    if action.kind is AffordanceKind.LINK:
        return f"{emoji} {_link(row.verified_url, action.label)}"
    text = f"{emoji} {esc(action.label)}"
    if row.verification_message != UNKNOWN and action.kind is AffordanceKind.BUTTON:
        text += f" <i>({esc(row.verification_message)})</i>"
    return text


def render_row(row: DisplayRow, privacy_mode: bool) -> str:
    return "\n".join([
        f"<b>{esc(row.token_name)}</b> · {esc(row.token_type)} · {esc(row.network)}",
        f"   Contract: {render_identifier(row.contract_address, row.contract_url, privacy_mode)}",
        f"   Tx: {render_identifier(row.tx_hash, row.tx_url, privacy_mode)}",
        f"   Verification: {render_verification(row)}",
        f"   Deployed: {esc(format_timestamp(row.deployed_at))}",
    ])


def render_deployments(rows: Sequence[DisplayRow], privacy_mode: bool, loading: bool = False,
                       error: str = "", alert: str = "", limit: int = 10) -> Tuple[str, List[ButtonRow]]:
    """Deployment history message plus the Verify/Retry buttons available"""
    lines = ["📜 <b>Deployment History</b>", DIVIDER]
    if alert:
        lines.append(f"⚠️ {esc(alert)}")
    if loading:
        lines.append("Loading deployments…")
    elif error:
        lines.append(f"❌ {esc(error)}")
    elif not rows:
        lines.append("No deployments recorded yet.")

    buttons: List[ButtonRow] = []
    for row in list(rows)[:limit]:
        lines.append(render_row(row, privacy_mode))
        action = affordance(row.verification_status)
        callback = f"verify:{row.record_id}"
        # Telegram caps callback data at 64 bytes
        if action.actionable and row.record_id != UNKNOWN and len(callback.encode()) <= 64:
            buttons.append([(f"{action.label}: {row.token_name}", callback)])

    if len(rows) > limit:
        lines.append(f"… and {len(rows) - limit} more")
    if rows and not privacy_mode:
        lines.append("<i>Explorer links are provided for independent public verification.</i>")

    buttons.append([
        ("🔄 Refresh", "deployments"),
        ("🙈 Privacy On" if not privacy_mode else "👁 Privacy Off", "privacy"),
    ])
    return "\n\n".join(lines), buttons


def render_activity(entries: Iterable[ActivityLogEntry]) -> str:
    entries = list(entries)
    lines = ["🗂 <b>Recent Activity</b>", DIVIDER]
    if not entries:
        lines.append("No activity in this session yet.")
    for entry in entries:
        emoji = "✅" if entry.succeeded else "❌"
        when = format_timestamp(entry.timestamp)
        lines.append(f"{emoji} {esc(entry.label)}\n   {esc(when)} · {esc(entry.kind.value)}")
    return "\n".join(lines)

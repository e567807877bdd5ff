#!/usr/bin/env python3
"""
ChainForge Deployment Stats Tool
Deployment history viewer and exporter for the terminal

Usage:
  python deployment_stats.py            # interactive menu
  python deployment_stats.py --quick    # quick stats and exit
  python deployment_stats.py --csv      # export normalized rows and exit
"""

import csv
import os
import sys
from collections import Counter
from datetime import datetime
from typing import List

from chainforge.config import ConsoleConfig, setup_logging
from chainforge.errors import ConfigurationError, TransportError
from chainforge.models import DisplayRow
from chainforge.services import SyncBackendClient, affordance, can_trigger, format_timestamp, normalize_all, shorten

# ANSI color codes (disable on Windows if issues)
ENABLE_COLORS = os.name != 'nt' or os.environ.get('ANSICON')


class Colors:
    if ENABLE_COLORS:
        GREEN = '\033[92m'
        YELLOW = '\033[93m'
        RED = '\033[91m'
        CYAN = '\033[96m'
        BOLD = '\033[1m'
        ENDC = '\033[0m'
    else:
        GREEN = YELLOW = RED = CYAN = BOLD = ENDC = ''


STATUS_COLORS = {
    "verified": Colors.GREEN,
    "pending": Colors.YELLOW,
    "submitting": Colors.YELLOW,
    "failed": Colors.RED,
    "retryable": Colors.RED,
}

CSV_COLUMNS = [
    "file", "tokenName", "tokenType", "network", "contractAddress", "txHash",
    "deployedAt", "verificationStatus", "verificationMessage", "explorerUrl",
    "contractUrl", "txUrl",
]


def print_section(title: str):
    """Print section header"""
    print(f"\n{Colors.CYAN}{Colors.BOLD}{title}{Colors.ENDC}")
    print("-" * 40)


def load_rows(client: SyncBackendClient) -> List[DisplayRow]:
    """Fetch and normalize the deployment list"""
    return normalize_all(client.list_deployments())


def status_counts(rows: List[DisplayRow]) -> Counter:
    return Counter(row.verification_status.value for row in rows)


def network_counts(rows: List[DisplayRow]) -> Counter:
    return Counter(row.network for row in rows)


def quick_stats(rows: List[DisplayRow]):
    """Display quick overview stats"""
    print(f"\n{Colors.BOLD}{'='*60}{Colors.ENDC}")
    print(f"{Colors.BOLD}CHAINFORGE - DEPLOYMENT STATS{Colors.ENDC}".center(60))
    print(f"{Colors.BOLD}{'='*60}{Colors.ENDC}")

    print_section("📊 DEPLOYMENTS")
    counts = status_counts(rows)
    print(f"Total: {len(rows):,} | Verified: {counts.get('verified', 0)} | "
          f"Awaiting action: {sum(1 for row in rows if can_trigger(row.verification_status))}")

    print_section("🔎 VERIFICATION")
    for status, count in counts.most_common():
        color = STATUS_COLORS.get(status, '')
        print(f"{color}{status:<15}{Colors.ENDC} {count}")

    print_section("🌐 NETWORKS")
    for network, count in network_counts(rows).most_common():
        print(f"{network:<15} {count}")


def detailed_stats(rows: List[DisplayRow], limit: int = 20):
    """List recent deployments"""
    print_section("🚀 RECENT DEPLOYMENTS")
    if not rows:
        print("No deployments recorded yet.")
        return

    for row in rows[:limit]:
        color = STATUS_COLORS.get(row.verification_status.value, '')
        action = affordance(row.verification_status)
        print(f"{row.token_name:<20} {row.token_type:<8} {row.network:<10} "
              f"{shorten(row.contract_address):<14} {color}{action.label:<16}{Colors.ENDC} "
              f"{format_timestamp(row.deployed_at)}")
        if row.contract_url:
            print(f"   {row.contract_url}")


def export_data(rows: List[DisplayRow]) -> str:
    """Export normalized rows to CSV"""
    filename = f"chainforge_deployments_{datetime.now().strftime('%Y%m%d_%H%M%S')}.csv"
    with open(filename, 'w', newline='', encoding='utf-8') as f:
        writer = csv.DictWriter(f, fieldnames=CSV_COLUMNS)
        writer.writeheader()
        for row in rows:
            writer.writerow(row.to_dict())

    print(f"✅ {filename} - {len(rows)} rows")
    return filename


def request_verification(client: SyncBackendClient, rows: List[DisplayRow]) -> List[DisplayRow]:
    """Ask the backend to verify one deployment, then reload the list"""
    actionable = [row for row in rows if can_trigger(row.verification_status)]
    if not actionable:
        print(f"{Colors.YELLOW}⚠️  No deployments awaiting verification{Colors.ENDC}")
        return rows

    for index, row in enumerate(actionable, 1):
        print(f"{index}. {row.token_name} ({row.record_id}) - {affordance(row.verification_status).label}")

    choice = input(f"\n{Colors.CYAN}Select deployment: {Colors.ENDC}")
    if not choice.isdigit() or not 1 <= int(choice) <= len(actionable):
        print(f"{Colors.RED}Invalid option!{Colors.ENDC}")
        return rows

    record_id = actionable[int(choice) - 1].record_id
    try:
        client.verify_contract(record_id)
        print(f"{Colors.GREEN}✅ Verification requested for {record_id}{Colors.ENDC}")
    except TransportError as e:
        print(f"{Colors.RED}❌ {e.message}{Colors.ENDC}")

    # Always reload: the backend owns the verification state
    try:
        return load_rows(client)
    except TransportError as e:
        print(f"{Colors.RED}❌ {e.message}{Colors.ENDC}")
        return rows


def main():
    """Main menu"""
    try:
        config = ConsoleConfig.from_env()
        setup_logging("WARNING")
        client = SyncBackendClient(config)
    except ConfigurationError as e:
        print(f"{Colors.RED}❌ {e}{Colors.ENDC}")
        return 1

    try:
        rows = load_rows(client)
    except TransportError as e:
        print(f"{Colors.RED}❌ {e.message}{Colors.ENDC}")
        return 1

    if len(sys.argv) > 1 and sys.argv[1] == "--quick":
        quick_stats(rows)
        return 0
    if len(sys.argv) > 1 and sys.argv[1] == "--csv":
        export_data(rows)
        return 0

    while True:
        print(f"\n{Colors.BOLD}📊 CHAINFORGE DEPLOYMENT STATS{Colors.ENDC}")
        print("="*35)
        print("1. Quick Stats")
        print("2. Recent Deployments")
        print("3. Export to CSV")
        print("4. Request Verification")
        print("5. Reload")
        print("0. Exit")

        choice = input(f"\n{Colors.CYAN}Select option: {Colors.ENDC}")

        if choice == "1":
            quick_stats(rows)
        elif choice == "2":
            detailed_stats(rows)
        elif choice == "3":
            export_data(rows)
        elif choice == "4":
            rows = request_verification(client, rows)
        elif choice == "5":
            try:
                rows = load_rows(client)
                print(f"✅ Loaded {len(rows)} deployments")
            except TransportError as e:
                print(f"{Colors.RED}❌ {e.message}{Colors.ENDC}")
        elif choice == "0":
            print(f"{Colors.GREEN}Goodbye!{Colors.ENDC}")
            break
        else:
            print(f"{Colors.RED}Invalid option!{Colors.ENDC}")

    return 0


if __name__ == "__main__":
    sys.exit(main())

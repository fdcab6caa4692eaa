#!/usr/bin/env python3
"""WhistleVault Report Demo - full lifecycle against the development stubs.

Connects a development identity, runs the encryption engine handshake,
submits one confidential report, reveals it through multi-party
decryption, and asks for the reveal a second time to show that an
already verified report is served from the ledger.

Usage:
    python scripts/run_report_demo.py [options]

Options:
    --title TEXT         Report title (default: "Procurement kickbacks")
    --description TEXT   Report description
    --category NAME      corruption|fraud|safety|environment|other
    --value N            Confidential value to encrypt (default: 250000)
    --risk N             Public risk level 1-10 (default: 5)
    --race               Let another party verify the report mid-protocol
    --json-logs          Emit JSON logs instead of console output
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


# ANSI color codes for terminal output
class Colors:
    HEADER = "\033[95m"
    CYAN = "\033[96m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    RED = "\033[91m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"


def print_header(text: str) -> None:
    """Print a formatted header."""
    print(f"\n{Colors.BOLD}{Colors.CYAN}{'=' * 70}")
    print(f"  {text}")
    print(f"{'=' * 70}{Colors.ENDC}\n")


def print_status(components) -> None:
    """Print the current status notice, if any."""
    notice = components.status_channel.current()
    if notice is None:
        print(f"{Colors.DIM}  (no status){Colors.ENDC}")
        return
    color = {
        "success": Colors.GREEN,
        "error": Colors.RED,
        "cancelled": Colors.YELLOW,
    }.get(notice.tag.value, Colors.CYAN)
    print(f"  {color}[{notice.tag.value}] {notice.message}{Colors.ENDC}")


def print_reports(components) -> None:
    """Print the store snapshot and its statistics."""
    stats = components.store.stats()
    print(
        f"  total={stats.total} verified={stats.verified} "
        f"pending={stats.pending} average_risk={stats.average_risk:.1f}"
    )
    for report in components.store.snapshot():
        value = report.clear_value if report.is_verified else "<encrypted>"
        print(
            f"  - {report.id} [{report.category.value}] {report.title} "
            f"risk={report.public_risk_level} value={value}"
        )


async def run_demo(args: argparse.Namespace) -> int:
    from whistlevault.bootstrap.logging import configure_structlog
    from whistlevault.bootstrap.orchestrator import create_report_orchestrator
    from whistlevault.config import DEV_LEDGER_CLIENT_CONFIG, LifecycleConfig
    from whistlevault.domain.errors import InvalidReportDraftError
    from whistlevault.domain.models import ReportCategory, ReportDraft, SessionContext
    from whistlevault.infrastructure.stubs import DEV_CONTRACT_ADDRESS, DEV_SIGNER_ADDRESS

    configure_structlog("production" if args.json_logs else "development")

    try:
        draft = ReportDraft(
            title=args.title,
            category=ReportCategory(args.category),
            value=args.value,
            description=args.description,
            risk_level=args.risk,
        )
    except InvalidReportDraftError as e:
        print(f"{Colors.RED}Invalid report: {e.message}{Colors.ENDC}")
        return 2

    components = create_report_orchestrator(
        DEV_LEDGER_CLIENT_CONFIG, LifecycleConfig.from_environment()
    )
    orchestrator = components.orchestrator
    session = SessionContext(
        identity=DEV_SIGNER_ADDRESS, contract_address=DEV_CONTRACT_ADDRESS
    )

    print_header("1. System status")
    await orchestrator.check_availability()
    print_status(components)

    print_header("2. Encryption engine handshake")
    if not await components.gate.on_identity_available(session):
        print_status(components)
        return 1
    print(f"  {Colors.GREEN}engine ready{Colors.ENDC}")

    print_header("3. Submit report")
    report = await orchestrator.submit_report(session, draft)
    print_status(components)
    if report is None:
        return 1
    print_reports(components)

    if args.race:

        async def verify_elsewhere() -> None:
            components.ledger.mark_verified_externally(report.id, args.value)

        components.gateway.before_proof_ready = verify_elsewhere

    print_header("4. Reveal evidence")
    clear_value = await orchestrator.verify_and_decrypt(session, report.id)
    print_status(components)
    print(f"  clear value: {clear_value}")

    print_header("5. Reveal again")
    again = await orchestrator.verify_and_decrypt(session, report.id)
    print_status(components)
    print(f"  clear value: {again}")

    print_header("Reports")
    print_reports(components)

    print_header("Recent activity")
    for entry in components.history.recent():
        print(f"  {entry.timestamp.isoformat()}  {entry.action}")

    return 0 if clear_value == args.value else 1


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run the confidential report lifecycle against development stubs"
    )
    parser.add_argument("--title", default="Procurement kickbacks")
    parser.add_argument(
        "--description",
        default="Supplier invoices inflated in exchange for contract renewals",
    )
    parser.add_argument(
        "--category",
        default="corruption",
        choices=["corruption", "fraud", "safety", "environment", "other"],
    )
    parser.add_argument("--value", type=int, default=250000)
    parser.add_argument("--risk", type=int, default=5)
    parser.add_argument(
        "--race",
        action="store_true",
        help="Verify the report from another party before the proof lands",
    )
    parser.add_argument("--json-logs", action="store_true")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    return asyncio.run(run_demo(args))


if __name__ == "__main__":
    sys.exit(main())

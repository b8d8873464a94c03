"""
Display formatting for sync results.
Separated from the sync logic for testability.
"""

from typing import List

from plugin_bridge.services.sync_service import TargetOutcome
from plugin_bridge.utils import Colors


def display_outcomes(outcomes: List[TargetOutcome]) -> None:
    """Print one summary block per target."""
    for outcome in outcomes:
        if not outcome.ok:
            print(f"{Colors.RED}✗ {outcome.target}{Colors.ENDC}: {outcome.error}")
            continue

        report = outcome.report
        print(f"{Colors.GREEN}✓ Synced to {outcome.target}:{Colors.ENDC} {outcome.root}")
        print(f"   {len(report.written)} files written, "
              f"{len(report.linked)} skills linked, "
              f"{len(report.copied)} skills copied")

        if report.skipped:
            print(f"   {Colors.YELLOW}⚠ Skipped invalid skill names: {', '.join(report.skipped)}{Colors.ENDC}")
        if report.server_map_path:
            print(f"   🔌 MCP servers merged into {report.server_map_path}")
        if report.backup_path:
            print(f"   {Colors.CYAN}Backed up existing config to {report.backup_path}{Colors.ENDC}")
        if report.block_path:
            state = "updated" if report.block_changed else "unchanged"
            print(f"   📜 {report.block_path.name} managed block {state}")

    print()

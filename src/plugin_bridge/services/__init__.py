"""
Services: business logic kept out of the CLI.
"""

from plugin_bridge.services.report_display import display_outcomes
from plugin_bridge.services.sync_service import TargetOutcome, resolve_targets, run_sync

__all__ = ["TargetOutcome", "display_outcomes", "resolve_targets", "run_sync"]

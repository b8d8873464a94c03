"""Filesystem side of a sync: primitives, managed blocks and the bundle writer."""

from plugin_bridge.sync.blocks import BlockMarkers, ensure_managed_block, upsert_managed_block
from plugin_bridge.sync.files import ReadResult, read_text_if_exists
from plugin_bridge.sync.writer import SyncWriter, TargetPaths, run_timestamp

__all__ = [
    "BlockMarkers",
    "ReadResult",
    "SyncWriter",
    "TargetPaths",
    "ensure_managed_block",
    "read_text_if_exists",
    "run_timestamp",
    "upsert_managed_block",
]

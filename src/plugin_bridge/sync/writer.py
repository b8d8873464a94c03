"""
Sync Writer
Persists a Bundle under a target root.

Generated files and pass-through skills are owned by Plugin Bridge and are
overwritten. The server map and the managed block are read-modify-write
against state the target tool owns, so they run last.
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from ..core.mcp import merge_server_maps
from ..core.names import is_valid_skill_name
from ..core.types import Bundle, SyncReport
from ..utils import logger
from .blocks import BlockMarkers, ensure_managed_block
from .files import (
    backup_file,
    copy_dir,
    ensure_dir,
    force_symlink,
    read_json_if_exists,
    unlink_symlink,
    write_json,
    write_text,
)

SKILL_FILE = "SKILL.md"
BACKUP_TIMESTAMP_FORMAT = "%Y%m%dT%H%M%S"


@dataclass(frozen=True)
class TargetPaths:
    """Where each bundle part lands. Parts with a None path are not written."""
    root: Path
    skills_dir: Path
    prompts_dir: Optional[Path] = None
    extensions_dir: Optional[Path] = None
    server_map_path: Optional[Path] = None
    instructions_path: Optional[Path] = None
    block_markers: Optional[BlockMarkers] = None
    block_body: str = ""


def run_timestamp(now: Optional[datetime] = None) -> str:
    return (now or datetime.now()).strftime(BACKUP_TIMESTAMP_FORMAT)


class SyncWriter:
    def __init__(
        self,
        paths: TargetPaths,
        target: str = "",
        timestamp: Optional[str] = None,
        link_skills: bool = True,
    ) -> None:
        self.paths = paths
        self.target = target
        self.timestamp = timestamp or run_timestamp()
        self.link_skills = link_skills

    def write(self, bundle: Bundle) -> SyncReport:
        paths = self.paths
        report = SyncReport(target=self.target, root=paths.root)

        ensure_dir(paths.skills_dir)
        if paths.prompts_dir is not None:
            ensure_dir(paths.prompts_dir)
            for prompt in bundle.prompts:
                self._write_generated(paths.prompts_dir / f"{prompt.name}.md", prompt.content, report)

        for skill in bundle.skill_dirs:
            if not is_valid_skill_name(skill.name):
                logger.warning("Skipping skill with invalid name: %s", skill.name)
                report.skipped.append(skill.name)
                continue
            dest = paths.skills_dir / skill.name
            if self.link_skills:
                force_symlink(skill.source_dir, dest)
                report.linked.append(dest)
            else:
                copy_dir(skill.source_dir, dest)
                report.copied.append(dest)

        for generated in bundle.generated_skills:
            # a skill link from an earlier run may point into a source tree
            unlink_symlink(paths.skills_dir / generated.name)
            dest = paths.skills_dir / generated.name / SKILL_FILE
            self._write_generated(dest, generated.content, report)

        if paths.extensions_dir is not None:
            ensure_dir(paths.extensions_dir)
            for extension in bundle.extensions:
                self._write_generated(paths.extensions_dir / extension.name, extension.content, report)

        if paths.server_map_path is not None and bundle.server_map is not None:
            report.backup_path = self.merge_server_map(paths.server_map_path, bundle.server_map)
            report.server_map_path = paths.server_map_path

        if paths.instructions_path is not None and paths.block_markers is not None:
            report.block_path = paths.instructions_path
            report.block_changed = ensure_managed_block(
                paths.instructions_path, paths.block_body, paths.block_markers
            )

        return report

    def merge_server_map(self, path: Path, server_map: dict) -> Optional[Path]:
        """Merge ``server_map`` into the JSON file at ``path``. Returns the backup path, if any."""
        existing = read_json_if_exists(path)
        merged = merge_server_maps(existing, server_map)
        backup_path = backup_file(path, self.timestamp)
        write_json(path, merged)
        return backup_path

    def _write_generated(self, path: Path, content: str, report: SyncReport) -> None:
        unlink_symlink(path)
        write_text(path, content + "\n")
        report.written.append(path)

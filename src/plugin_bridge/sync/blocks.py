"""
Managed blocks in instruction documents (AGENTS.md and friends).

Only the region between the begin/end markers belongs to Plugin Bridge;
everything around it is user content and is kept as-is.
"""

from dataclasses import dataclass
from pathlib import Path

from .files import read_text_if_exists, write_text


@dataclass(frozen=True)
class BlockMarkers:
    begin: str
    end: str

    def wrap(self, body: str) -> str:
        return "\n".join([self.begin, body.strip(), self.end])


def upsert_managed_block(existing: str, block: str, markers: BlockMarkers) -> str:
    """Return ``existing`` with ``block`` replacing or appended as the managed region."""
    # the managed region is the first end marker after a begin marker,
    # opened by the begin marker closest to it
    first_begin = existing.find(markers.begin)
    end = -1
    if first_begin != -1:
        end = existing.find(markers.end, first_begin + len(markers.begin))

    if end != -1:
        start = existing.rfind(markers.begin, 0, end)
        before = existing[:start].rstrip()
        after = existing[end + len(markers.end):].lstrip()
        updated = "\n\n".join(part for part in (before, block, after) if part)
        # trailing content keeps its own ending; a block at the end gets one newline
        return updated if after else updated + "\n"

    if not existing.strip():
        return block + "\n"

    return existing.rstrip() + "\n\n" + block + "\n"


def ensure_managed_block(path: Path, body: str, markers: BlockMarkers) -> bool:
    """
    Create or update the managed block in ``path``.
    Returns True if the file was written; an unchanged file is not touched.
    """
    block = markers.wrap(body)
    current = read_text_if_exists(path)

    if not current.found:
        write_text(path, block + "\n")
        return True

    updated = upsert_managed_block(current.text, block, markers)
    if updated == current.text:
        return False
    write_text(path, updated)
    return True

"""Tests for filesystem primitives used while syncing."""

import json
import os
import stat

import pytest

from plugin_bridge.errors import SyncError
from plugin_bridge.sync.files import (
    backup_file,
    copy_dir,
    force_symlink,
    read_json_if_exists,
    read_text_if_exists,
    write_json,
    write_text,
)


def test_read_text_missing_file(tmp_path):
    """Verify a missing file is reported as absent, not as an error."""
    result = read_text_if_exists(tmp_path / "nope.md")

    assert result.found is False
    assert result.text is None


def test_read_text_existing_file(tmp_path):
    path = tmp_path / "a.md"
    path.write_text("hello")

    result = read_text_if_exists(path)

    assert result.found is True
    assert result.text == "hello"


def test_read_text_directory_raises(tmp_path):
    """Verify failures other than not-found carry the path and operation."""
    with pytest.raises(SyncError) as exc_info:
        read_text_if_exists(tmp_path)

    assert exc_info.value.operation == "read"
    assert exc_info.value.path == tmp_path


def test_read_json_missing_is_empty(tmp_path):
    assert read_json_if_exists(tmp_path / "mcp.json") == {}


def test_read_json_invalid_raises(tmp_path):
    path = tmp_path / "mcp.json"
    path.write_text("{not json")

    with pytest.raises(SyncError) as exc_info:
        read_json_if_exists(path)

    assert exc_info.value.operation == "parse"


def test_read_json_non_object_raises(tmp_path):
    path = tmp_path / "mcp.json"
    path.write_text("[1, 2]")

    with pytest.raises(SyncError):
        read_json_if_exists(path)


def test_write_text_creates_parents(tmp_path):
    path = tmp_path / "a" / "b" / "c.md"

    write_text(path, "content")

    assert path.read_text() == "content"


def test_write_json_is_private(tmp_path):
    """Verify JSON config files are written with owner-only permissions."""
    path = tmp_path / "mcp.json"
    path.write_text("{}")
    os.chmod(path, 0o644)

    write_json(path, {"mcpServers": {}})

    assert json.loads(path.read_text()) == {"mcpServers": {}}
    assert stat.S_IMODE(path.stat().st_mode) == 0o600


def test_backup_file(tmp_path):
    path = tmp_path / "mcp.json"
    path.write_text('{"old": true}')

    backup = backup_file(path, "20260101T000000")

    assert backup == tmp_path / "mcp.json.bak.20260101T000000"
    assert backup.read_text() == '{"old": true}'


def test_backup_missing_file(tmp_path):
    assert backup_file(tmp_path / "mcp.json", "20260101T000000") is None


def test_force_symlink_replaces_directory(tmp_path):
    """Verify an existing directory at the link path is replaced."""
    source = tmp_path / "source"
    source.mkdir()
    target = tmp_path / "skills" / "skill-one"
    target.mkdir(parents=True)
    (target / "stale.md").write_text("stale")

    assert force_symlink(source, target) is True
    assert target.is_symlink()
    assert target.resolve() == source.resolve()


def test_force_symlink_same_source_is_noop(tmp_path):
    source = tmp_path / "source"
    source.mkdir()
    target = tmp_path / "link"

    assert force_symlink(source, target) is True
    assert force_symlink(source, target) is False


def test_force_symlink_repoints_link(tmp_path):
    old = tmp_path / "old"
    new = tmp_path / "new"
    old.mkdir()
    new.mkdir()
    target = tmp_path / "link"
    target.symlink_to(old, target_is_directory=True)

    assert force_symlink(new, target) is True
    assert target.resolve() == new.resolve()


def test_copy_dir_replaces_target(tmp_path):
    source = tmp_path / "source"
    source.mkdir()
    (source / "SKILL.md").write_text("fresh")
    target = tmp_path / "copy"
    target.mkdir()
    (target / "stale.md").write_text("stale")

    copy_dir(source, target)

    assert (target / "SKILL.md").read_text() == "fresh"
    assert not (target / "stale.md").exists()


def test_unlink_symlink_leaves_target(tmp_path):
    from plugin_bridge.sync.files import unlink_symlink

    source = tmp_path / "source"
    source.mkdir()
    (source / "SKILL.md").write_text("keep")
    link = tmp_path / "link"
    link.symlink_to(source, target_is_directory=True)

    assert unlink_symlink(link) is True
    assert not link.exists()
    assert (source / "SKILL.md").read_text() == "keep"
    assert unlink_symlink(source) is False

"""Tests for mcpsync CLI — commands, exit codes, output."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from mcpsync.cli import EXIT_CONFIG_ERROR, EXIT_OK, EXIT_RUNTIME_ERROR, main
from mcpsync.config import CONFIG_FILENAME

# ===================================================================
# Helpers
# ===================================================================

SOURCE = {
    "mcpServers": {
        "foo": {"command": "a", "args": []},
        "atlassian": {"type": "http", "url": "https://mcp.atlassian.com/v1/sse"},
    }
}


def _read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def _home(tmp_path: Path) -> Path:
    return tmp_path / "home"


def _write_config(tmp_path: Path) -> Path:
    """Write a config whose targets all live under tmp_path/home, plus a source."""
    home = _home(tmp_path)
    (tmp_path / ".mcp.json").write_text(json.dumps(SOURCE))
    skill = tmp_path / "skills" / "jira"
    skill.mkdir(parents=True)
    (skill / "SKILL.md").write_text("jira v2")

    cfg = tmp_path / CONFIG_FILENAME
    cfg.write_text(
        "version: 1\n"
        "source:\n"
        "  mcp: .mcp.json\n"
        "  skills: skills\n"
        "targets:\n"
        f'  claude: "{home / ".claude.json"}"\n'
        f'  copilot_cli: "{home / ".copilot" / "mcp-config.json"}"\n'
        f'  vscode_user_settings: "{home / "Code" / "User" / "settings.json"}"\n'
        f'  user_skills: "{home / ".claude" / "skills"}"\n'
    )
    return cfg


def _invoke(cfg: Path, *args: str, **kwargs: Any):
    return CliRunner().invoke(main, ["-c", str(cfg), *args], **kwargs)


# ===================================================================
# Tests — version and help
# ===================================================================


def test_version():
    result = CliRunner().invoke(main, ["--version"])
    assert result.exit_code == EXIT_OK
    assert "mcpsync" in result.output
    assert "0.1.0" in result.output


def test_help():
    result = CliRunner().invoke(main, ["--help"])
    assert result.exit_code == EXIT_OK
    for cmd in ("mcp", "skills", "init", "targets"):
        assert cmd in result.output


@pytest.mark.parametrize("cmd", ["mcp", "skills", "init", "targets"])
def test_subcommand_help(cmd: str):
    result = CliRunner().invoke(main, [cmd, "--help"])
    assert result.exit_code == EXIT_OK
    assert "--help" in result.output


# ===================================================================
# Tests — init
# ===================================================================


def test_init_creates_file(tmp_path: Path):
    runner = CliRunner()
    with runner.isolated_filesystem(temp_dir=tmp_path) as td:
        result = runner.invoke(main, ["init"])
        assert result.exit_code == EXIT_OK
        assert "Created" in result.output
        assert (Path(td) / CONFIG_FILENAME).is_file()


def test_init_no_overwrite(tmp_path: Path):
    runner = CliRunner()
    with runner.isolated_filesystem(temp_dir=tmp_path) as td:
        (Path(td) / CONFIG_FILENAME).write_text("existing")
        result = runner.invoke(main, ["init"])
        assert result.exit_code == EXIT_CONFIG_ERROR
        assert "already exists" in result.output


def test_init_force(tmp_path: Path):
    runner = CliRunner()
    with runner.isolated_filesystem(temp_dir=tmp_path) as td:
        (Path(td) / CONFIG_FILENAME).write_text("old content")
        result = runner.invoke(main, ["init", "--force"])
        assert result.exit_code == EXIT_OK
        assert "version: 1" in (Path(td) / CONFIG_FILENAME).read_text()


# ===================================================================
# Tests — mcp
# ===================================================================


def test_mcp_invalid_config(tmp_path: Path):
    cfg = tmp_path / CONFIG_FILENAME
    cfg.write_text("version: 99\n")
    result = _invoke(cfg, "mcp", "--claude")
    assert result.exit_code == EXIT_CONFIG_ERROR
    assert "Error" in result.output


def test_mcp_no_target(tmp_path: Path):
    result = _invoke(_write_config(tmp_path), "mcp")
    assert result.exit_code == EXIT_CONFIG_ERROR
    assert "No target specified" in result.output


def test_mcp_missing_source(tmp_path: Path):
    cfg = _write_config(tmp_path)
    result = _invoke(cfg, "mcp", "--claude", "--source", str(tmp_path / "absent.json"))
    assert result.exit_code == EXIT_CONFIG_ERROR
    assert "Source not found" in result.output
    assert not _home(tmp_path).exists()


def test_mcp_vscode_project_requires_project_dir(tmp_path: Path):
    cfg = _write_config(tmp_path)
    result = _invoke(cfg, "mcp", "--claude", "--vscode-project")
    assert result.exit_code == EXIT_CONFIG_ERROR
    assert "--project-dir is required" in result.output
    assert not _home(tmp_path).exists()


def test_mcp_project_dir_must_exist(tmp_path: Path):
    cfg = _write_config(tmp_path)
    result = _invoke(cfg, "mcp", "--vscode-project", "--project-dir", str(tmp_path / "nope"))
    assert result.exit_code == EXIT_CONFIG_ERROR
    assert "does not exist" in result.output


def test_mcp_claude(tmp_path: Path):
    cfg = _write_config(tmp_path)
    result = _invoke(cfg, "mcp", "--claude")

    assert result.exit_code == EXIT_OK
    assert "Sync complete" in result.output
    data = _read_json(_home(tmp_path) / ".claude.json")
    assert data == SOURCE


def test_mcp_dry_run(tmp_path: Path):
    cfg = _write_config(tmp_path)
    result = _invoke(cfg, "mcp", "--claude", "--copilot-cli-user", "--dry-run")

    assert result.exit_code == EXIT_OK
    assert "DRY RUN" in result.output
    assert not _home(tmp_path).exists()


def test_mcp_all(tmp_path: Path):
    cfg = _write_config(tmp_path)
    project = tmp_path / "project"
    project.mkdir()

    result = _invoke(cfg, "mcp", "--all", "--project-dir", str(project))

    assert result.exit_code == EXIT_OK
    home = _home(tmp_path)
    assert _read_json(home / ".claude.json")["mcpServers"]["atlassian"]["type"] == "http"
    copilot = _read_json(home / ".copilot" / "mcp-config.json")["mcpServers"]
    assert copilot["atlassian"]["command"] == "npx"
    assert _read_json(home / "Code" / "User" / "settings.json") == {"chat.mcp.autostart": True}
    vscode = _read_json(project / ".vscode" / "mcp.json")["servers"]
    assert vscode["atlassian"] == {
        "type": "stdio",
        "command": "npx",
        "args": ["mcp-remote", "https://mcp.atlassian.com/v1/mcp"],
    }
    assert _read_json(project / ".vscode" / "settings.json") == {"chat.mcp.autostart": True}


def test_mcp_failed_target_does_not_stop_others(tmp_path: Path):
    cfg = _write_config(tmp_path)
    claude_path = _home(tmp_path) / ".claude.json"
    claude_path.parent.mkdir(parents=True)
    claude_path.write_text("{not json")

    result = _invoke(cfg, "mcp", "--claude", "--copilot-cli-user")

    assert result.exit_code == EXIT_RUNTIME_ERROR
    assert claude_path.read_text() == "{not json"
    assert (_home(tmp_path) / ".copilot" / "mcp-config.json").is_file()


def test_mcp_backup_sibling(tmp_path: Path):
    cfg = _write_config(tmp_path)
    claude_path = _home(tmp_path) / ".claude.json"
    claude_path.parent.mkdir(parents=True)
    claude_path.write_text('{"mcpServers": {}}')

    result = _invoke(cfg, "mcp", "--claude")

    assert result.exit_code == EXIT_OK
    assert (claude_path.parent / ".claude.json.bak").read_text() == '{"mcpServers": {}}'


def test_mcp_no_backup_flag(tmp_path: Path):
    cfg = _write_config(tmp_path)
    claude_path = _home(tmp_path) / ".claude.json"
    claude_path.parent.mkdir(parents=True)
    claude_path.write_text("{}")

    result = _invoke(cfg, "mcp", "--claude", "--no-backup")

    assert result.exit_code == EXIT_OK
    assert not (claude_path.parent / ".claude.json.bak").exists()


def test_mcp_backup_dir_from_env(tmp_path: Path):
    cfg = _write_config(tmp_path)
    claude_path = _home(tmp_path) / ".claude.json"
    claude_path.parent.mkdir(parents=True)
    claude_path.write_text("{}")
    backups = tmp_path / "backups"

    result = _invoke(cfg, "mcp", "--claude", env={"MCPSYNC_BACKUP_DIR": str(backups)})

    assert result.exit_code == EXIT_OK
    assert len(list(backups.glob(".claude.json.*.bak"))) == 1


def test_mcp_quiet(tmp_path: Path):
    cfg = _write_config(tmp_path)
    result = CliRunner().invoke(main, ["-q", "-c", str(cfg), "mcp", "--claude"])
    assert result.exit_code == EXIT_OK
    assert "Sync complete" not in result.output


# ===================================================================
# Tests — skills
# ===================================================================


def test_skills_list(tmp_path: Path):
    result = _invoke(_write_config(tmp_path), "skills", "--list")
    assert result.exit_code == EXIT_OK
    assert "jira" in result.output


def test_skills_no_target(tmp_path: Path):
    result = _invoke(_write_config(tmp_path), "skills")
    assert result.exit_code == EXIT_CONFIG_ERROR
    assert "No target specified" in result.output


def test_skills_user(tmp_path: Path):
    result = _invoke(_write_config(tmp_path), "skills", "--user")
    assert result.exit_code == EXIT_OK
    dest = _home(tmp_path) / ".claude" / "skills" / "jira" / "SKILL.md"
    assert dest.read_text() == "jira v2"


def test_skills_skip_then_force(tmp_path: Path):
    cfg = _write_config(tmp_path)
    dest = _home(tmp_path) / ".claude" / "skills" / "jira"
    dest.mkdir(parents=True)
    (dest / "SKILL.md").write_text("jira v1")

    result = _invoke(cfg, "skills", "--user")
    assert result.exit_code == EXIT_OK
    assert (dest / "SKILL.md").read_text() == "jira v1"

    result = _invoke(cfg, "skills", "--user", "--force")
    assert result.exit_code == EXIT_OK
    assert (dest / "SKILL.md").read_text() == "jira v2"


def test_skills_unknown_skill(tmp_path: Path):
    result = _invoke(_write_config(tmp_path), "skills", "--user", "--skill", "nope")
    assert result.exit_code == EXIT_CONFIG_ERROR
    assert "Available: jira" in result.output


def test_skills_filter_outside_source_rejected(tmp_path: Path):
    cfg = _write_config(tmp_path)
    outside = tmp_path / "outside"
    outside.mkdir()
    (outside / "SKILL.md").write_text("not from the source")

    result = _invoke(cfg, "skills", "--user", "--skill", "../outside")

    assert result.exit_code == EXIT_CONFIG_ERROR
    assert "Available: jira" in result.output
    assert not (_home(tmp_path) / ".claude" / "skills").exists()

def test_skills_project_requires_project_dir(tmp_path: Path):
    result = _invoke(_write_config(tmp_path), "skills", "--all")
    assert result.exit_code == EXIT_CONFIG_ERROR
    assert "--project-dir is required" in result.output
    assert not _home(tmp_path).exists()


def test_skills_project(tmp_path: Path):
    cfg = _write_config(tmp_path)
    project = tmp_path / "project"
    project.mkdir()
    result = _invoke(cfg, "skills", "--project", "--project-dir", str(project))
    assert result.exit_code == EXIT_OK
    assert (project / ".claude" / "skills" / "jira" / "SKILL.md").is_file()


def test_skills_dry_run(tmp_path: Path):
    result = _invoke(_write_config(tmp_path), "skills", "--user", "--dry-run")
    assert result.exit_code == EXIT_OK
    assert "DRY RUN" in result.output
    assert not _home(tmp_path).exists()


# ===================================================================
# Tests — targets
# ===================================================================


def test_targets_lists_user_targets(tmp_path: Path):
    result = _invoke(_write_config(tmp_path), "targets")
    assert result.exit_code == EXIT_OK
    assert "claude" in result.output
    assert "copilot-cli-user" in result.output
    assert "vscode-project" not in result.output

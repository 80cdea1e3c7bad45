"""Config file loading and validation for mcpsync.yaml."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

CONFIG_FILENAME = "mcpsync.yaml"
SUPPORTED_VERSIONS = {1}


def default_vscode_user_settings() -> str:
    """VSCode user ``settings.json`` location for the running platform."""
    if sys.platform.startswith("linux"):
        return "~/.config/Code/User/settings.json"
    return "~/Library/Application Support/Code/User/settings.json"


# === Config Dataclasses ===


@dataclass
class SourceConfig:
    """Source of truth locations."""

    mcp: str = ".mcp.json"
    skills: str = ".claude/skills"


@dataclass
class TargetPaths:
    """User-level target locations. Project-level targets derive from --project-dir."""

    claude: str = "~/.claude.json"
    copilot_cli: str = "~/.copilot/mcp-config.json"
    vscode_user_settings: str = field(default_factory=default_vscode_user_settings)
    user_skills: str = "~/.claude/skills"


@dataclass
class SyncOptions:
    """Sync behavior options."""

    backup: bool = True
    backup_dir: str = ""  # empty: sibling <file>.bak
    log_dir: str = ""  # empty: no log file


@dataclass
class McpSyncConfig:
    """Top-level mcpsync configuration."""

    version: int = 1
    source: SourceConfig = field(default_factory=SourceConfig)
    targets: TargetPaths = field(default_factory=TargetPaths)
    sync: SyncOptions = field(default_factory=SyncOptions)

    # Resolved at load time (not from YAML)
    config_dir: Path = field(default_factory=lambda: Path.cwd())
    config_path: Path | None = None

    def resolve(self, path_str: str) -> Path:
        return resolve_path(path_str, self.config_dir)

    @property
    def backup_dir(self) -> Path | None:
        return self.resolve(self.sync.backup_dir) if self.sync.backup_dir else None

    @property
    def log_dir(self) -> Path | None:
        return self.resolve(self.sync.log_dir) if self.sync.log_dir else None


# === Errors ===


class ConfigError(Exception):
    """Raised when config file is invalid or missing."""


# === Path Resolution ===


def resolve_path(path_str: str, base_dir: Path) -> Path:
    """Resolve a path string: expand ~ and make relative paths absolute."""
    p = Path(path_str).expanduser()
    if not p.is_absolute():
        p = base_dir / p
    return p


# === Config Discovery ===


def find_config(start_dir: Path | None = None) -> Path | None:
    """Find mcpsync.yaml by walking up from start_dir (or cwd)."""
    current = (start_dir or Path.cwd()).resolve()

    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate

        parent = current.parent
        if parent == current:
            return None  # Reached filesystem root
        current = parent


# === Parsing ===


def _require_mapping(raw: Any, section: str) -> dict[str, Any]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"'{section}' must be a mapping, got {type(raw).__name__}")
    return raw


def _string(raw: dict[str, Any], key: str, section: str, default: str) -> str:
    value = raw.get(key, default)
    if not isinstance(value, str):
        raise ConfigError(f"{section}.{key} must be a string, got {type(value).__name__}")
    return value


def _parse_source(raw: dict[str, Any]) -> SourceConfig:
    return SourceConfig(
        mcp=_string(raw, "mcp", "source", SourceConfig.mcp),
        skills=_string(raw, "skills", "source", SourceConfig.skills),
    )


def _parse_targets(raw: dict[str, Any]) -> TargetPaths:
    unknown = set(raw) - {"claude", "copilot_cli", "vscode_user_settings", "user_skills"}
    if unknown:
        raise ConfigError(f"Unknown target(s) in 'targets': {', '.join(sorted(unknown))}")
    defaults = TargetPaths()
    return TargetPaths(
        claude=_string(raw, "claude", "targets", defaults.claude),
        copilot_cli=_string(raw, "copilot_cli", "targets", defaults.copilot_cli),
        vscode_user_settings=_string(
            raw, "vscode_user_settings", "targets", defaults.vscode_user_settings
        ),
        user_skills=_string(raw, "user_skills", "targets", defaults.user_skills),
    )


def _parse_sync_options(raw: dict[str, Any]) -> SyncOptions:
    backup = raw.get("backup", True)
    if not isinstance(backup, bool):
        raise ConfigError(f"sync.backup must be a boolean, got {type(backup).__name__}")
    return SyncOptions(
        backup=backup,
        backup_dir=_string(raw, "backup_dir", "sync", SyncOptions.backup_dir),
        log_dir=_string(raw, "log_dir", "sync", SyncOptions.log_dir),
    )


# === Loading ===


def load_config(config_path: Path) -> McpSyncConfig:
    """Load and validate mcpsync.yaml from a specific path."""
    if not config_path.is_file():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        raw = yaml.safe_load(config_path.read_text())
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"Config file must be a YAML mapping, got {type(raw).__name__}")

    # Version check
    version = raw.get("version")
    if version is None:
        raise ConfigError("Missing required field 'version'")
    if not isinstance(version, int) or isinstance(version, bool):
        raise ConfigError(f"'version' must be an integer, got {type(version).__name__}")
    if version not in SUPPORTED_VERSIONS:
        raise ConfigError(
            f"Unsupported config version {version}. Supported: {sorted(SUPPORTED_VERSIONS)}"
        )

    return McpSyncConfig(
        version=version,
        source=_parse_source(_require_mapping(raw.get("source"), "source")),
        targets=_parse_targets(_require_mapping(raw.get("targets"), "targets")),
        sync=_parse_sync_options(_require_mapping(raw.get("sync"), "sync")),
        config_dir=config_path.parent.resolve(),
        config_path=config_path,
    )


def load(config_path: str | Path | None = None) -> McpSyncConfig:
    """Load config from explicit path or discover mcpsync.yaml.

    Args:
        config_path: Explicit path to config file, or None to auto-discover.

    Returns:
        Parsed McpSyncConfig; built-in defaults rooted at the cwd when no
        config file is found.

    Raises:
        ConfigError: If an explicit config is missing, or any config is invalid.
    """
    if config_path is not None:
        return load_config(Path(config_path).resolve())

    found = find_config()
    if not found:
        return McpSyncConfig()
    return load_config(found)


# === Default Config Generation ===


DEFAULT_CONFIG = """\
# mcpsync.yaml: distribute MCP servers and skills to AI coding agents

version: 1

# Source of truth (relative paths are resolved against this file's directory)
source:
  mcp: .mcp.json                  # Claude Code format: {"mcpServers": {...}}
  skills: .claude/skills          # <name>/SKILL.md per skill

# User-level targets (project-level targets come from --project-dir)
targets:
  claude: ~/.claude.json
  copilot_cli: ~/.copilot/mcp-config.json
  # vscode_user_settings: ~/.config/Code/User/settings.json
  user_skills: ~/.claude/skills

# Sync options
sync:
  backup: true                    # Back up files before overwriting
  backup_dir: ""                  # Empty: write <file>.bak next to the file
  log_dir: ""                     # Empty: no log file
"""


def generate_default_config(target_dir: Path, force: bool = False) -> Path:
    """Write default mcpsync.yaml to target_dir.

    Returns:
        Path to the created config file.

    Raises:
        ConfigError: If file already exists and force=False.
    """
    target = target_dir / CONFIG_FILENAME
    if target.exists() and not force:
        raise ConfigError(f"{CONFIG_FILENAME} already exists. Use --force to overwrite.")

    target.write_text(DEFAULT_CONFIG)
    return target

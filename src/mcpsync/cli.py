"""CLI entry point for mcpsync."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING, NoReturn

import click

from mcpsync import __version__
from mcpsync.errors import SourceMissing, SyncError, TargetPrerequisiteMissing, UnknownEntity

if TYPE_CHECKING:
    from mcpsync.config import McpSyncConfig
    from mcpsync.targets.base import Target
    from mcpsync.utils.logger import SyncLogger

# Exit codes
EXIT_OK = 0
EXIT_RUNTIME_ERROR = 1
EXIT_CONFIG_ERROR = 2

# Run order when several targets are selected
MCP_TARGETS = ("claude", "copilot-cli-user", "vscode-user", "vscode-project")


# ===================================================================
# Target registry
# ===================================================================


def check_project_dir(project_dir: Path | None, needed_by: str) -> Path:
    """Return *project_dir* if given and existing, else raise TargetPrerequisiteMissing."""
    if project_dir is None:
        raise TargetPrerequisiteMissing(
            f"--project-dir is required when using {needed_by} (or --all)"
        )
    if not project_dir.is_dir():
        raise TargetPrerequisiteMissing(f"Project directory does not exist: {project_dir}")
    return project_dir


def create_targets(
    config: McpSyncConfig,
    names: list[str],
    *,
    project_dir: Path | None = None,
    backup: bool = True,
    logger: SyncLogger | None = None,
) -> dict[str, Target]:
    """Instantiate the MCP targets in *names*, in :data:`MCP_TARGETS` order.

    Raises:
        TargetPrerequisiteMissing: If ``vscode-project`` is requested without
            an existing *project_dir*.
    """
    from mcpsync.targets.claude import ClaudeUserTarget
    from mcpsync.targets.copilot import CopilotCliUserTarget
    from mcpsync.targets.vscode import VSCodeProjectTarget, VSCodeUserTarget

    if "vscode-project" in names:
        project_dir = check_project_dir(project_dir, "--vscode-project")

    common = {"backup": backup, "backup_dir": config.backup_dir, "logger": logger}
    targets: dict[str, Target] = {}
    for name in MCP_TARGETS:
        if name not in names:
            continue
        if name == "claude":
            targets[name] = ClaudeUserTarget(config.resolve(config.targets.claude), **common)
        elif name == "copilot-cli-user":
            targets[name] = CopilotCliUserTarget(
                config.resolve(config.targets.copilot_cli), **common
            )
        elif name == "vscode-user":
            targets[name] = VSCodeUserTarget(
                config.resolve(config.targets.vscode_user_settings), **common
            )
        elif name == "vscode-project":
            targets[name] = VSCodeProjectTarget(project_dir, **common)
    return targets


def _load_config(ctx: click.Context) -> McpSyncConfig:
    from mcpsync.config import ConfigError, load

    try:
        return load(ctx.obj["config_path"])
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)


def _fail(message: str, code: int = EXIT_CONFIG_ERROR) -> NoReturn:
    click.echo(f"Error: {message}", err=True)
    sys.exit(code)


def _path(value: str | None) -> Path | None:
    return Path(value).expanduser().resolve() if value else None


# ===================================================================
# CLI group
# ===================================================================


@click.group()
@click.version_option(version=__version__, prog_name="mcpsync")
@click.option("--config", "-c", type=click.Path(), help="Path to mcpsync.yaml config file.")
@click.option("--quiet", "-q", is_flag=True, help="Minimal output.")
@click.pass_context
def main(ctx: click.Context, config: str | None, quiet: bool) -> None:
    """Distribute MCP server configs and skills to AI coding agents."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config
    ctx.obj["quiet"] = quiet


# ===================================================================
# mcp
# ===================================================================


@main.command()
@click.option("--all", "all_targets", is_flag=True, help="All four targets (needs --project-dir).")
@click.option("--claude", is_flag=True, help="Claude Code user-level (~/.claude.json).")
@click.option("--copilot-cli-user", is_flag=True, help="Copilot CLI user-level config.")
@click.option("--vscode-user", is_flag=True, help="Enable chat.mcp.autostart in VSCode user settings.")
@click.option("--vscode-project", is_flag=True, help="<project>/.vscode/mcp.json + autostart.")
@click.option("--project-dir", type=click.Path(), help="Project directory for --vscode-project.")
@click.option("--source", type=click.Path(), help="Override the source .mcp.json path.")
@click.option("--dry-run", is_flag=True, help="Show what would change without writing files.")
@click.option("--no-backup", is_flag=True, help="Skip creating backups before writing.")
@click.option(
    "--backup-dir",
    type=click.Path(),
    envvar="MCPSYNC_BACKUP_DIR",
    help="Store timestamped backups here instead of <file>.bak.",
)
@click.pass_context
def mcp(
    ctx: click.Context,
    all_targets: bool,
    claude: bool,
    copilot_cli_user: bool,
    vscode_user: bool,
    vscode_project: bool,
    project_dir: str | None,
    source: str | None,
    dry_run: bool,
    no_backup: bool,
    backup_dir: str | None,
) -> None:
    """Merge source MCP servers into target configs. Existing entries are never overwritten."""
    from mcpsync.utils.logger import SyncLogger

    quiet: bool = ctx.obj["quiet"]
    cfg = _load_config(ctx)

    if no_backup:
        cfg.sync.backup = False
    if backup_dir:
        cfg.sync.backup_dir = str(_path(backup_dir))

    flags = {
        "claude": claude,
        "copilot-cli-user": copilot_cli_user,
        "vscode-user": vscode_user,
        "vscode-project": vscode_project,
    }
    names = [n for n in MCP_TARGETS if all_targets or flags[n]]
    if not names:
        _fail(
            "No target specified. Use --all, --claude, --copilot-cli-user, "
            "--vscode-user, or --vscode-project."
        )

    source_path = _path(source) or cfg.resolve(cfg.source.mcp)
    if not source_path.is_file():
        _fail(f"Source not found: {source_path}")

    log = SyncLogger(dry_run=dry_run, quiet=quiet)
    try:
        targets = create_targets(
            cfg,
            names,
            project_dir=_path(project_dir),
            backup=cfg.sync.backup,
            logger=log,
        )
    except TargetPrerequisiteMissing as e:
        _fail(str(e))

    if dry_run:
        log.info("dry-run mode: no files will be modified")

    from mcpsync.sync import SyncEngine

    engine = SyncEngine(source_path, targets, logger=log)
    try:
        result = engine.run(dry_run=dry_run)
    except SourceMissing as e:
        _fail(str(e))
    except SyncError as e:
        _fail(str(e), EXIT_RUNTIME_ERROR)

    if cfg.log_dir is not None:
        log.flush_to_file(cfg.log_dir)

    if not quiet:
        from mcpsync.utils.output import print_sync_summary

        print_sync_summary(result)

    sys.exit(EXIT_OK if result.success else EXIT_RUNTIME_ERROR)


# ===================================================================
# skills
# ===================================================================


@main.command()
@click.option("--user", "user_level", is_flag=True, help="User-level skills directory.")
@click.option("--project", "project_level", is_flag=True, help="<project>/.claude/skills.")
@click.option("--all", "all_targets", is_flag=True, help="Both targets (needs --project-dir).")
@click.option("--skill", help="Sync only the named skill.")
@click.option("--project-dir", type=click.Path(), help="Project directory for --project.")
@click.option("--force", is_flag=True, help="Overwrite skills that already exist in the target.")
@click.option("--dry-run", is_flag=True, help="Show what would be copied without copying.")
@click.option("--list", "list_only", is_flag=True, help="List available skills and exit.")
@click.pass_context
def skills(
    ctx: click.Context,
    user_level: bool,
    project_level: bool,
    all_targets: bool,
    skill: str | None,
    project_dir: str | None,
    force: bool,
    dry_run: bool,
    list_only: bool,
) -> None:
    """Copy skill directories to user-level or project-level skill directories."""
    from mcpsync.skills import list_source_skills, sync_skills
    from mcpsync.utils.logger import SyncLogger

    quiet: bool = ctx.obj["quiet"]
    cfg = _load_config(ctx)
    source_dir = cfg.resolve(cfg.source.skills)

    if list_only:
        from mcpsync.utils.output import print_skill_list

        print_skill_list(list_source_skills(source_dir))
        sys.exit(EXIT_OK)

    if not source_dir.is_dir():
        _fail(f"Skills source directory not found: {source_dir}")

    selected = {"user": user_level or all_targets, "project": project_level or all_targets}
    if not any(selected.values()):
        _fail("No target specified. Use --user, --project, or --all.")

    dests: dict[str, Path] = {}
    try:
        if selected["user"]:
            dests["user"] = cfg.resolve(cfg.targets.user_skills)
        if selected["project"]:
            proj = check_project_dir(_path(project_dir), "--project")
            dests["project"] = proj / ".claude" / "skills"
        available = list_source_skills(source_dir)
        if skill is not None and skill not in available:
            raise UnknownEntity("skill", skill, available)
    except SyncError as e:
        _fail(str(e))

    log = SyncLogger(dry_run=dry_run, quiet=quiet)
    if dry_run:
        log.info("dry-run mode: no files will be copied")
    if force:
        log.info("force mode: existing skills will be overwritten")
    log.info(f"Source: {source_dir}")

    results = {}
    for label, dest in dests.items():
        log.section(f"{label}: {dest}")
        try:
            results[label] = sync_skills(
                source_dir, dest, log, skill=skill, force=force, dry_run=dry_run
            )
        except SourceMissing as e:
            _fail(str(e))
        except SyncError as e:
            log.error(f"{label}: {e}")

    if cfg.log_dir is not None:
        log.flush_to_file(cfg.log_dir)

    if not quiet:
        from mcpsync.utils.output import print_skills_summary

        print_skills_summary(results, dry_run=dry_run)

    sys.exit(EXIT_RUNTIME_ERROR if log.count("ERROR") else EXIT_OK)


# ===================================================================
# init
# ===================================================================


@main.command()
@click.option("--force", is_flag=True, help="Overwrite existing mcpsync.yaml.")
def init(force: bool) -> None:
    """Create an mcpsync.yaml config file with sensible defaults."""
    from mcpsync.config import ConfigError, generate_default_config

    try:
        path = generate_default_config(Path.cwd(), force=force)
        click.echo(f"Created {path}")
    except ConfigError as e:
        _fail(str(e))


# ===================================================================
# targets
# ===================================================================


@main.command("targets")
@click.option("--project-dir", type=click.Path(), help="Include the project-level target.")
@click.pass_context
def list_targets(ctx: click.Context, project_dir: str | None) -> None:
    """Show MCP targets and the files they write."""
    from mcpsync.utils.output import print_targets

    cfg = _load_config(ctx)
    names = [n for n in MCP_TARGETS if n != "vscode-project" or project_dir]
    try:
        targets = create_targets(cfg, names, project_dir=_path(project_dir))
    except TargetPrerequisiteMissing as e:
        _fail(str(e))

    click.echo(f"Source: {cfg.resolve(cfg.source.mcp)}")
    print_targets(targets)

# cli.py
from __future__ import annotations

import sys
from pathlib import Path

import click

from belay.ci.errors import ParseError
from belay.config import ConfigError, default_config_path, load_config
from belay.git_facts.git import NotAGitRepository, get_triggers, repo_root
from belay.hooks import HOOK_FILENAMES, install_hook
from belay.runner import (
    GITHUB_WORKFLOWS_DIR,
    GITLAB_CI_FILES,
    NoCiConfigurationFound,
    ShellSpawnError,
    TaskFailed,
    discover_ci_configs,
    plan_tasks,
    run_checks,
)
from belay.selector import explain_selection
from belay.ui.console import Console, get_console, set_console


def _find_root() -> Path:
    console = get_console()
    try:
        return repo_root()
    except NotAGitRepository as e:
        console.print_error(
            str(e),
            suggestion="Run belay from inside a git repository.",
        )
        sys.exit(1)


def _load_config(config_path: Path | None):
    console = get_console()
    try:
        return load_config(config_path)
    except ConfigError as e:
        console.print_error(
            "Invalid configuration",
            str(e),
            suggestion="Fix or delete the file; a default one is written when it is missing.",
        )
        sys.exit(1)


def _print_plan(ci_configs, config, triggers) -> None:
    console = get_console()
    console.print_header("PLAN")
    for ci_config in ci_configs:
        source = getattr(ci_config, "source", None)
        if source:
            console.print_info(Path(source).name)
        for selection in explain_selection(ci_config.all_tasks(), config.command_blacklist, triggers):
            if selection.selected:
                console.print_plan_task(selection.task.display_name, selection.reason)
            else:
                console.print_plan_task_skipped(selection.task.display_name, selection.reason)
    console.print_info("")


@click.group(invoke_without_command=True)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces and detailed output)",
)
@click.option(
    "--config",
    "config_path",
    default=None,
    envvar="BELAY_CONFIG",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file (defaults to the per-user belay config)",
)
@click.pass_context
def cli(ctx, debug, config_path):
    """belay: run your CI checks locally before you push."""
    console = Console(debug=debug)
    set_console(console)
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = config_path

    # bare `belay` (what the git hooks call) runs the checks
    if ctx.invoked_subcommand is None:
        ctx.invoke(run)


@cli.command()
@click.option("--print-plan/--no-print-plan", default=False, show_default=True, help="Print selected/skipped tasks")
@click.option("--dry-run", is_flag=True, default=False, help="Plan only, run nothing")
@click.pass_context
def run(ctx, print_plan, dry_run):
    """Run the repository's CI commands locally."""
    console = get_console()
    root = _find_root()
    config = _load_config(ctx.obj.get("config_path"))

    try:
        ci_configs = discover_ci_configs(root)
        triggers = get_triggers(cwd=root)
        console.print_debug(f"Triggers: {triggers}")

        if print_plan or dry_run:
            _print_plan(ci_configs, config, triggers)

        if dry_run:
            tasks = plan_tasks(ci_configs, config, triggers)
            console.print_info(f"{len(tasks)} task(s) would run")
            return

        run_checks(root, config, triggers, ci_configs=ci_configs)

    except NoCiConfigurationFound as e:
        console.print_error(
            str(e),
            details=e.reasons if ctx.obj.get("debug", False) else None,
            suggestion=(
                "Looked for:\n"
                f"  {GITHUB_WORKFLOWS_DIR.as_posix()}/*.yml\n"
                f"  {GITLAB_CI_FILES[0]}"
            ),
        )
        sys.exit(1)
    except TaskFailed as e:
        console.print_error("Failed", str(e))
        sys.exit(1)
    except (ShellSpawnError, ParseError) as e:
        console.print_exception(e)
        sys.exit(1)
    except KeyboardInterrupt:
        console.print_info("\nInterrupted by user")
        sys.exit(130)


@cli.command()
@click.argument("hook_type", type=click.Choice(sorted(HOOK_FILENAMES)))
def hook(hook_type):
    """Install a git hook (commit -> pre-commit, push -> pre-push) that runs belay."""
    console = get_console()
    root = _find_root()

    try:
        hook_path = install_hook(root, hook_type)
    except OSError as e:
        console.print_error("Could not write hook", str(e))
        sys.exit(1)

    console.print_info(f"Created hook `{hook_path.relative_to(root).as_posix()}`")


@cli.command(name="config")
@click.pass_context
def show_config(ctx):
    """Show the config file location and the command blacklist."""
    console = get_console()
    config_path = ctx.obj.get("config_path") or default_config_path()
    config = _load_config(config_path)
    console.print_config(str(config_path), config.command_blacklist)


if __name__ == "__main__":
    cli()

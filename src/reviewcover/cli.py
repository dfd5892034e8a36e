"""Command-line interface for reviewcover."""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path

import click

from reviewcover import __version__
from reviewcover.config import (
    ReviewConfig,
    find_project_root,
    get_config_value,
    load_config,
    save_config,
    set_config_value,
)
from reviewcover.exceptions import ConfigError, ReviewCoverError
from reviewcover.ui.console import Console

console = Console()


def _get_project_root(path: str | None = None) -> Path:
    """Find the project root or error."""
    if path:
        root = Path(path).resolve()
        if not root.exists():
            console.error(f"Path does not exist: {path}")
            sys.exit(1)
        return root

    root = find_project_root()
    if root is None:
        console.error(
            "Not inside a git repository. Run from a checkout, "
            "or specify a path with --path."
        )
        sys.exit(1)
    return root


def _load_config_or_exit(root: Path) -> ReviewConfig:
    try:
        return load_config(root)
    except ConfigError as e:
        console.error(str(e))
        sys.exit(1)


def _relative_to_root(paths: tuple[str, ...], root: Path) -> list[str]:
    """Make explicit paths relative to the repository root.

    Paths are taken relative to the current directory whether or not they
    still exist on disk, so deleted files resolve the same way.
    """
    cwd = Path.cwd()
    return [
        Path(os.path.relpath((cwd / p).resolve(), root)).as_posix()
        for p in paths
    ]


@click.group()
@click.version_option(version=__version__, prog_name="reviewcover")
@click.option("--debug", is_flag=True, help="Log debug output to stderr.")
def main(debug: bool):
    """reviewcover - find the fewest reviewers who know the files you changed."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@main.command()
@click.option("--path", "-p", default=None, help="Path to the project root.")
def init(path: str | None):
    """Write a default configuration to .reviewcover/config.json."""
    root = Path(path or ".").resolve()
    if not root.exists():
        console.error(f"Path does not exist: {root}")
        sys.exit(1)

    config = _load_config_or_exit(root)
    config_path = save_config(root, config)
    console.success(f"Configuration saved to {config_path}")


@main.command()
@click.argument("paths", nargs=-1)
@click.option("--path", "-p", "project", default=None, help="Path to the project root.")
@click.option("--base", "-b", default=None, help="Base ref to diff against (default from config).")
@click.option("--depth", type=click.IntRange(min=1), default=None,
              help="Revisions of history to read per file.")
@click.option("--limit", type=click.IntRange(min=1), default=None,
              help="Most candidate authors considered per file.")
@click.option("--jobs", "-j", type=click.IntRange(min=1), default=None,
              help="Files whose history is read in parallel.")
@click.option("--exclude", "-x", multiple=True, help="Identity to never suggest (repeatable).")
@click.option("--include-self", is_flag=True, help="Allow suggesting yourself.")
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json", "markdown"]),
    default="text",
    help="Output format.",
)
@click.option("--quiet", "-q", is_flag=True, help="Print reviewer identities only.")
@click.option("--verbose", "-v", is_flag=True, help="Also show every author's score per file.")
def suggest(
    paths: tuple[str, ...],
    project: str | None,
    base: str | None,
    depth: int | None,
    limit: int | None,
    jobs: int | None,
    exclude: tuple[str, ...],
    include_self: bool,
    output_format: str,
    quiet: bool,
    verbose: bool,
):
    """Suggest reviewers for the changes since BASE, or for explicit PATHS.

    Examples:

        reviewcover suggest --base origin/main

        reviewcover suggest -q src/app.py src/db.py
    """
    from reviewcover.cover import ReviewerEngine
    from reviewcover.git import GitHistoryProvider, my_identity, resolve_changed_files

    root = _get_project_root(project)
    config = _load_config_or_exit(root)

    try:
        files = resolve_changed_files(
            root,
            base=base or config.diff.base,
            paths=_relative_to_root(paths, root) if paths else None,
        )
    except ReviewCoverError as e:
        console.error(str(e))
        sys.exit(1)

    if not files:
        if not quiet:
            console.warning("No changed files")
        return

    excluded = set(config.reviewers.exclude) | set(exclude)
    if config.reviewers.exclude_self and not include_self:
        me = my_identity(root)
        if me:
            excluded.add(me)

    engine = ReviewerEngine(GitHistoryProvider(root), jobs=jobs or config.history.jobs)
    run_kwargs = dict(
        excluded=excluded,
        history_depth=depth or config.history.depth,
        candidate_limit=limit or config.history.candidate_limit,
    )

    try:
        if quiet or output_format != "text":
            report = engine.run(files, **run_kwargs)
        else:
            with console.history_progress() as progress:
                task = progress.add_task("Reading history...", total=len(files))

                def on_progress(file_path: str, current: int, total: int):
                    progress.update(
                        task, total=total, completed=current,
                        description=f"History of {file_path}",
                    )

                report = engine.run(files, progress_callback=on_progress, **run_kwargs)
    except ReviewCoverError as e:
        console.error(str(e))
        sys.exit(1)

    if output_format == "json":
        click.echo(json.dumps(report.to_dict(), indent=2))
        return
    if output_format == "markdown":
        from reviewcover.report.markdown import render_report

        click.echo(render_report(report, include_scores=verbose))
        return

    if quiet:
        console.show_reviewer_list(report)
        return

    console.show_assignments(report)
    console.show_uncovered(report)
    if verbose:
        console.show_scores(report)


@main.command("config")
@click.argument("action", type=click.Choice(["set", "get", "show"]))
@click.argument("key", required=False)
@click.argument("value", required=False)
@click.option("--path", "-p", default=None, help="Path to the project root.")
def config_cmd(action: str, key: str | None, value: str | None, path: str | None):
    """Manage reviewcover configuration."""
    root = _get_project_root(path)
    config = _load_config_or_exit(root)

    if action == "show":
        console.console.print_json(json.dumps(config.model_dump(), indent=2))
    elif action == "get":
        if not key:
            console.error("Usage: reviewcover config get <key>")
            sys.exit(1)
        try:
            data = get_config_value(config, key)
        except KeyError:
            console.error(f"Unknown key: {key}")
            sys.exit(1)
        console.console.print(f"{key} = {data}", markup=False)
    elif action == "set":
        if not key or value is None:
            console.error("Usage: reviewcover config set <key> <value>")
            sys.exit(1)
        # Try to parse as JSON for non-string values
        try:
            parsed_value = json.loads(value)
        except json.JSONDecodeError:
            parsed_value = value

        try:
            config = set_config_value(config, key, parsed_value)
        except KeyError:
            console.error(f"Unknown config key: {key}")
            sys.exit(1)
        except ConfigError as e:
            console.error(str(e))
            sys.exit(1)
        save_config(root, config)
        console.success(f"Set {key} = {parsed_value}")


if __name__ == "__main__":
    main()

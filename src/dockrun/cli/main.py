"""Click CLI group: validate, update-index and update-readme CI commands."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from dockrun.ci import set_output
from dockrun.config import Settings, get_settings, validate_settings
from dockrun.errors import DockrunError
from dockrun.github import GitHubClient
from dockrun.logging import configure_logging
from dockrun.readme import update_readme
from dockrun.repo_index import (
    RepoIndex,
    files_to_process,
    load_repo_index,
    update_repo_index,
    write_repo_index,
)
from dockrun.validation import validate_files, write_validation_results


def _build_client(settings: Settings) -> GitHubClient:
    return GitHubClient.from_settings(settings)


def _root(ctx: click.Context) -> Path:
    return ctx.obj["root"]


@click.group()
@click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Repository root that command, index and README paths are relative to.",
)
@click.option("--log-level", default=None, help="Override LOG_LEVEL.")
@click.pass_context
def cli(ctx: click.Context, root: Path, log_level: str | None) -> None:
    """Curation tooling for docker run command entries."""
    settings = get_settings()
    configure_logging(
        log_level or settings.log_level,
        json_output=True if int(settings.log_json) == 1 else None,
    )
    try:
        validate_settings(settings)
    except DockrunError as exc:
        raise click.ClickException(str(exc)) from exc
    ctx.ensure_object(dict)
    ctx.obj["root"] = root
    ctx.obj["settings"] = settings


@cli.command()
@click.argument("paths", nargs=-1)
@click.option(
    "--results",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Results artifact path (default: VALIDATION_RESULTS_PATH).",
)
@click.pass_context
def validate(ctx: click.Context, paths: tuple[str, ...], results: Path | None) -> None:
    """Validate changed command files and write the results artifact."""
    root = _root(ctx)
    settings: Settings = ctx.obj["settings"]

    try:
        index = load_repo_index(settings.resolve(root, settings.repo_index_path))
    except DockrunError as exc:
        raise click.ClickException(str(exc)) from exc

    with _build_client(settings) as client:
        report = validate_files(
            list(paths),
            root=root,
            index=index,
            client=client,
            repo_check_mode=settings.repo_check_mode,
        )

    if not report.has_command_changes:
        click.echo("No changes in commands directory. Skipping validation.")
        return

    for file_path in report.checked:
        errors = report.errors.get(file_path)
        if errors:
            click.echo(f"✗ Errors in {file_path}:", err=True)
            for error in errors:
                click.echo(f"  - {error}", err=True)
            continue
        click.echo(f"✓ {file_path} is valid")
        if file_path in report.updates:
            click.echo(f"  {file_path} is an update to an existing command")

    results_path = results or settings.resolve(root, settings.validation_results_path)
    write_validation_results(report, results_path)

    if report.valid:
        click.echo("All validations passed!")
        return
    click.echo("Validation failed. See errors above.", err=True)
    sys.exit(1)


@cli.command("update-index")
@click.argument("changed_files", required=False, default="")
@click.pass_context
def update_index(ctx: click.Context, changed_files: str) -> None:
    """Refresh repository index entries for changed command files."""
    root = _root(ctx)
    settings: Settings = ctx.obj["settings"]
    index_path = settings.resolve(root, settings.repo_index_path)

    try:
        files = files_to_process(changed_files, root=root, commands_dir=settings.commands_dir)
        click.echo(f"Files to process: {', '.join(files) or 'none'}")
        index = load_repo_index(index_path) or RepoIndex()
        with _build_client(settings) as client:
            changes_made = update_repo_index(
                index, files, root=root, client=client, commands_dir=settings.commands_dir
            )
    except DockrunError as exc:
        raise click.ClickException(f"Error updating repository index: {exc}") from exc

    if changes_made:
        write_repo_index(index, index_path)
        click.echo(f"Updated {index_path}")
    else:
        click.echo("No changes to the index file")
    set_output("changes_made", changes_made, settings=settings)


@cli.command("update-readme")
@click.option(
    "--readme",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Target document (default: README_PATH).",
)
@click.option(
    "--index",
    "index_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Repository index (default: REPO_INDEX_PATH).",
)
@click.pass_context
def update_readme_command(
    ctx: click.Context, readme: Path | None, index_file: Path | None
) -> None:
    """Regenerate the README application list and table of contents."""
    root = _root(ctx)
    settings: Settings = ctx.obj["settings"]
    readme_path = readme or settings.resolve(root, settings.readme_path)
    index_path = index_file or settings.resolve(root, settings.repo_index_path)

    try:
        index = load_repo_index(index_path)
        if index is None:
            raise click.ClickException(f"Repo index file does not exist at: {index_path}")
        click.echo(f"Found {len(index)} entries in repo index")
        changes_made = update_readme(index, readme_path)
    except (DockrunError, OSError) as exc:
        raise click.ClickException(f"Error updating {readme_path}: {exc}") from exc

    if changes_made:
        click.echo(f"{readme_path} updated")
    else:
        click.echo(f"{readme_path} is already up-to-date")
    set_output("changes_made", changes_made, settings=settings)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()

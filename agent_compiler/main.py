"""Agent compiler CLI - compiles profile configuration into agent and skill files."""

import logging
import sys
from pathlib import Path

import click
from rich.table import Table

from .compiler import compile_profile
from .console import console
from .errors import CompileError
from .errors import ValidationFailedError
from .loader import list_profiles
from .loader import load_profile
from .logging_setup import init_logging
from .paths import DEFAULT_OUTPUT_DIR
from .paths import DEFAULT_PROFILE
from .paths import DEFAULT_SOURCE_DIR
from .paths import ProjectPaths
from .utils.error_format import escape_markup
from .utils.error_format import format_error_message

logger = logging.getLogger(__name__)

source_option = click.option(
    "--source",
    "source_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=DEFAULT_SOURCE_DIR,
    show_default=True,
    envvar="AGENT_COMPILER_SOURCE",
    help="Source root containing agents.yaml, skills.yaml and profiles/",
)


@click.group()
def cli():
    """Compile agent and skill definitions from layered YAML configuration."""


@cli.command(name="compile")
@click.option(
    "--profile",
    "-p",
    default=DEFAULT_PROFILE,
    show_default=True,
    envvar="AGENT_COMPILER_PROFILE",
    help="Profile to compile",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@source_option
@click.option(
    "--output",
    "output_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=DEFAULT_OUTPUT_DIR,
    show_default=True,
    envvar="AGENT_COMPILER_OUTPUT",
    help="Output root; agents/ and skills/ are rebuilt here",
)
@click.option("--log-file", envvar="AGENT_COMPILER_LOG_PATH", help="Append structured JSONL logs to this file")
def compile_cmd(profile: str, verbose: bool, source_dir: Path, output_dir: Path, log_file: str | None):
    """Compile a profile into agents/, skills/ and CLAUDE.md."""
    init_logging(verbose=verbose, path=log_file)

    paths = ProjectPaths(root=source_dir, profile=profile)
    console.print(f"\n[bold]Compiling profile:[/bold] {escape_markup(profile)}\n")

    try:
        report = compile_profile(paths, output_dir)
    except ValidationFailedError:
        # Errors and warnings were already itemized by the validator
        sys.exit(1)
    except CompileError as e:
        console.print(f"\n[red]Error:[/red] {escape_markup(format_error_message(e, include_type=False))}")
        logger.debug("Compilation failed", exc_info=True)
        sys.exit(1)

    console.print(
        f"\n[green]✨ Done![/green] {len(report.agents)} agents, {len(report.skills)} skills"
        + (f", {len(report.warnings)} warnings" if report.warnings else "")
        + "\n"
    )


@cli.command(name="profiles")
@source_option
def profiles_cmd(source_dir: Path):
    """List available profiles."""
    names = list_profiles(ProjectPaths(root=source_dir, profile=DEFAULT_PROFILE))

    if not names:
        console.print(f"[yellow]No profiles found in {escape_markup(source_dir / 'profiles')}[/yellow]")
        return

    table = Table(title="Available Profiles", show_header=True, header_style="bold cyan")
    table.add_column("Name", style="green")
    table.add_column("Agents", justify="right")
    table.add_column("Description")

    for name in names:
        paths = ProjectPaths(root=source_dir, profile=name)
        try:
            config = load_profile(paths.profile_config)
        except CompileError as e:
            table.add_row(name, "-", f"[red]{escape_markup(format_error_message(e, include_type=False))}[/red]")
            continue
        table.add_row(name, str(len(config.agent_skills)), escape_markup(config.description))

    console.print(table)


def main():
    cli()


if __name__ == "__main__":
    main()

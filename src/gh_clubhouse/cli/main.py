"""Main CLI entry point for the GitHub to Clubhouse importer."""

import sys
import asyncio
from typing import List, Optional
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.status import Status
from rich.table import Table

from ..config.config import Config, ConfigViolation, validate_settings
from ..errors import ConfigurationError
from ..migration.engine import ImportEngine
from ..migration.orchestrator import ImportSummary
from ..utils.logging import setup_logging
from ..utils.reporting import CallbackReporter, ReportEvent, ReportLevel

console = Console()

DEFAULT_CONFIG_PATHS = ['gh-clubhouse.yaml', 'gh-clubhouse.yml', '.gh-clubhouse.yaml']


@click.group()
@click.version_option(version='0.1.0', prog_name='gh-clubhouse')
@click.option(
    '--config',
    '-c',
    type=click.Path(exists=True),
    help='Path to configuration file',
)
@click.option(
    '--verbose',
    '-v',
    is_flag=True,
    help='Enable verbose logging',
)
@click.pass_context
def cli(ctx: click.Context, config: Optional[str], verbose: bool) -> None:
    """GitHub to Clubhouse importer - Turn GitHub issues into Clubhouse stories."""
    ctx.ensure_object(dict)

    if config:
        ctx.obj['config_path'] = config
    ctx.obj['verbose'] = verbose

    setup_logging('DEBUG' if verbose else 'WARNING')


@cli.command('import')
@click.option('--github-token', help='GitHub personal access token')
@click.option('--clubhouse-token', help='Clubhouse API token')
@click.option('--clubhouse-project', help='Clubhouse project ID')
@click.option('--github-url', help='GitHub repository as owner/repo')
@click.option('--state', help='Issue state to import: open | closed | all')
@click.option(
    '--dry-run',
    is_flag=True,
    help='Map issues without creating stories',
)
@click.pass_context
def import_issues(
    ctx: click.Context,
    github_token: Optional[str],
    clubhouse_token: Optional[str],
    clubhouse_project: Optional[str],
    github_url: Optional[str],
    state: Optional[str],
    dry_run: Optional[bool],
) -> None:
    """Import GitHub issues into a Clubhouse project."""
    try:
        config = _load_config(ctx).with_overrides(
            github_token=github_token,
            clubhouse_token=clubhouse_token,
            clubhouse_project=clubhouse_project,
            github_repository=github_url,
            state=state,
            dry_run=True if dry_run else None,
        )
    except Exception as e:
        console.print(f'[red]✗[/red] Failed to load configuration: {e}')
        sys.exit(1)

    violations = validate_settings(config)
    if violations:
        _print_violations(violations)
        sys.exit(1)

    _setup_logging_with_config(ctx, config)

    if config.importer.dry_run:
        console.print(
            '[yellow]Running in dry-run mode - no stories will be created[/yellow]'
        )

    try:
        summary = asyncio.run(_run_import(config))
    except ConfigurationError as e:
        _print_violations(e.violations)
        sys.exit(1)
    except Exception as e:
        console.print(f'[red]✗[/red] Import failed: {escape(str(e))}')
        if ctx.obj.get('verbose'):
            console.print_exception()
        sys.exit(1)

    _display_import_summary(summary)


@cli.command()
@click.option(
    '--output',
    '-o',
    default='gh-clubhouse.yaml',
    help='Output configuration file path',
)
def init(output: str) -> None:
    """Initialize a new configuration file."""
    console.print(
        Panel.fit(
            '[bold green]GitHub to Clubhouse[/bold green]\n'
            'Initializing configuration...',
            border_style='green',
        )
    )

    try:
        Config.create_template(output)

        console.print(f'[green]✓[/green] Configuration template created at: {output}')
        console.print(
            f'[yellow]Please edit {output} with your GitHub and Clubhouse details[/yellow]'
        )

    except Exception as e:
        console.print(f'[red]✗[/red] Failed to create configuration: {e}')
        sys.exit(1)


@cli.command()
@click.pass_context
def validate(ctx: click.Context) -> None:
    """Validate configuration and connectivity."""
    console.print(
        Panel.fit(
            '[bold cyan]GitHub to Clubhouse[/bold cyan]\nValidating configuration...',
            border_style='cyan',
        )
    )

    try:
        config = _load_config(ctx)
    except Exception as e:
        console.print(f'[red]✗[/red] Validation failed: {e}')
        sys.exit(1)

    violations = validate_settings(config)
    if violations:
        _print_violations(violations)
        sys.exit(1)
    console.print('[green]✓[/green] Configuration validation completed')

    try:
        engine = ImportEngine(config)
        try:
            engine.test_connectivity()
        finally:
            engine.close()
    except Exception as e:
        console.print(f'[red]✗[/red] Validation failed: {e}')
        if ctx.obj.get('verbose'):
            console.print_exception()
        sys.exit(1)

    console.print('[green]✓[/green] Connectivity validation passed')


def _load_config(ctx: click.Context) -> Config:
    """Load configuration from file or environment."""
    config_path = ctx.obj.get('config_path')

    if config_path:
        return Config.from_file(config_path)

    for path in DEFAULT_CONFIG_PATHS:
        if Path(path).exists():
            return Config.from_file(path)

    return Config.from_env()


def _setup_logging_with_config(ctx: click.Context, config: Config) -> None:
    """Setup logging with configuration from config file."""
    verbose = ctx.obj.get('verbose', False)

    # Console stays at WARNING unless asked for more; the file sink keeps detail
    log_level = 'DEBUG' if verbose else max(
        config.logging.level, 'WARNING', key=_level_rank
    )
    setup_logging(
        level=log_level, log_file=config.logging.file, log_format=config.logging.format
    )


def _level_rank(level: str) -> int:
    return ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'].index(level)


def _print_violations(violations: List[ConfigViolation]) -> None:
    for violation in violations:
        console.print(f'[red]Usage: [bold]{violation.message}[/bold][/red]')
    console.print()


async def _run_import(config: Config) -> ImportSummary:
    """Run the import behind a spinner, printing report events as they arrive."""
    with console.status('Connecting to Clubhouse') as status:

        def show(event: ReportEvent) -> None:
            _print_event(status, event)

        engine = ImportEngine(config, reporter=CallbackReporter(show))
        return await engine.run()


def _print_event(status: Status, event: ReportEvent) -> None:
    if event.level == ReportLevel.INFO:
        status.update(event.message)
    elif event.level == ReportLevel.SUCCESS:
        console.print(f'[green]✓[/green] {escape(event.message)}')
    elif event.level == ReportLevel.WARNING:
        console.print(f'[yellow]![/yellow] {escape(event.message)}')
    else:
        console.print(f'[red]✗ {escape(event.message)}[/red]')


def _display_import_summary(summary: ImportSummary) -> None:
    """Display import summary results."""
    table = Table(title='Import Summary')
    table.add_column('Repository', style='cyan')
    table.add_column('Project', style='blue')
    table.add_column('Fetched', style='blue')
    table.add_column('Imported', style='green')
    table.add_column('Failed Batches', style='red')

    table.add_row(
        summary.repository,
        summary.project_id,
        str(summary.issues_fetched),
        str(summary.stories_imported),
        f'{summary.batches_failed}/{summary.batches_total}',
    )

    console.print(table)

    if summary.completed_at:
        duration = summary.completed_at - summary.started_at
        console.print(f'\n[blue]Import Duration:[/blue] {duration}')


def main() -> None:
    """Main entry point for the CLI application."""
    try:
        cli()
    except KeyboardInterrupt:
        console.print('\n[red]Import interrupted by user[/red]')
        sys.exit(1)


if __name__ == '__main__':
    main()

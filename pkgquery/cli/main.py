"""Main CLI entry point for pkgquery."""

import functools
import logging
import os
import sys
from typing import Any, Dict

import click
from rich.console import Console

from ..backends.local import InMemoryLocalDatabase, load_local_database
from ..backends.remote import load_remote_repository
from ..core.configuration import ConfigurationManager, SORT_KEY_ALIASES
from ..core.exceptions import PkgQueryError
from ..core.interfaces import Operation
from ..query import QueryEngine

# Diagnostics go to stderr, results to stdout
console = Console(stderr=True)


def setup_logging(verbose: bool = False):
    """Set up logging configuration."""
    # Check environment variable for log level override
    env_log_level = os.getenv('PKGQUERY_LOG_LEVEL', '').upper()
    if env_log_level in ['DEBUG', 'INFO', 'WARNING', 'ERROR']:
        level = getattr(logging, env_log_level)
    else:
        level = logging.DEBUG if verbose else logging.WARNING

    log_format = os.getenv('PKGQUERY_LOG_FORMAT', '%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    logging.basicConfig(
        level=level,
        format=log_format
    )


def query_options(func):
    """Options shared by every query command."""
    options = [
        click.option('--local-db', type=click.Path(exists=True, dir_okay=False),
                     default=lambda: os.getenv('PKGQUERY_LOCAL_DB'),
                     help='YAML file with installed packages and sync repositories (env: PKGQUERY_LOCAL_DB)'),
        click.option('--remote', type=click.Path(exists=True, dir_okay=False),
                     default=lambda: os.getenv('PKGQUERY_REMOTE'),
                     help='JSON dump of the remote repository (env: PKGQUERY_REMOTE)'),
        click.option('--sort', '-s', type=click.Choice(sorted(SORT_KEY_ALIASES)),
                     help='Sort results by name, vote, pop, idate, isize or rel'),
        click.option('--rsort', is_flag=True, help='Sort results in reverse order'),
        click.option('--format', '-f', 'format_out', help='Custom output format, e.g. "%n %v"'),
        click.option('--escape', is_flag=True, help='Escape double quotes in custom output'),
        click.option('--number', is_flag=True, help='Number the results'),
        click.option('--quiet', '-q', is_flag=True, help='Print nothing, only set the exit code'),
        click.option('--no-color', is_flag=True, help='Disable colors in the structured output'),
        click.option('--show-size', is_flag=True, help='Show package sizes'),
        click.option('--delimiter', help='Separator for list fields in custom output'),
        click.option('--just-one', is_flag=True, help='Report at most one package per target'),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def handle_errors(func):
    """Report pkgquery errors on the console and exit with status 1."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        ctx = click.get_current_context()
        try:
            return func(*args, **kwargs)
        except PkgQueryError as e:
            console.print(f"[red]Error:[/red] {e}")
            sys.exit(1)
        except (click.exceptions.Exit, click.ClickException, SystemExit):
            raise
        except Exception as e:
            console.print(f"[red]Unexpected error:[/red] {e}")
            if ctx.obj and ctx.obj.get('verbose'):
                console.print_exception()
            sys.exit(1)
    return wrapper


def build_engine(ctx, operation: Operation, options: Dict[str, Any], **extra) -> QueryEngine:
    """Build the configuration, load both package sources and create the engine."""
    local_db_path = options.pop('local_db')
    remote_path = options.pop('remote')
    options['reverse'] = options.pop('rsort')
    no_color = options.pop('no_color')

    # unset options and flags left off leave the configured value alone
    overrides = {k: v for k, v in options.items() if v is not None and v is not False}
    if no_color:
        overrides['color'] = False
    overrides['op'] = operation
    overrides.update(extra)

    config = ConfigurationManager(ctx.obj['config']).build(overrides)

    local_db = load_local_database(local_db_path) if local_db_path else InMemoryLocalDatabase()
    remote = load_remote_repository(remote_path) if remote_path else None
    return QueryEngine(config, local_db, remote)


def exit_with(found: int):
    """Exit with status 0 when something was found, 1 otherwise."""
    sys.exit(0 if found else 1)


@click.group()
@click.option('--config', '-c', type=click.Path(),
              default=lambda: os.getenv('PKGQUERY_CONFIG'),
              help='Path to configuration file (env: PKGQUERY_CONFIG)')
@click.option('--verbose', '-v', is_flag=True,
              help='Enable verbose logging (env: PKGQUERY_VERBOSE)')
@click.pass_context
def cli(ctx, config, verbose):
    """
    Query the local package database and the remote repository.

    \b
    Examples:

      # Search names and descriptions, best matches first
      pkgquery search --local-db db.yaml --remote aur.json -s rel editor

      # Installed packages satisfying a constraint
      pkgquery query --local-db db.yaml "bash>=5"

      # Custom output
      pkgquery list-repo --local-db db.yaml -f "%r/%n %v" core
    """
    ctx.ensure_object(dict)
    ctx.obj['config'] = config

    if not verbose and os.getenv('PKGQUERY_VERBOSE', '').lower() in ['true', '1', 'yes']:
        verbose = True

    ctx.obj['verbose'] = verbose
    setup_logging(verbose)


@cli.command()
@click.argument('terms', nargs=-1, required=True)
@query_options
@click.option('--regex', 'use_regex', is_flag=True, help='Treat search terms as regular expressions')
@click.option('--no-sync', is_flag=True, help='Do not search the sync repositories')
@click.option('--no-remote', is_flag=True, help='Do not search the remote repository')
@click.pass_context
@handle_errors
def search(ctx, terms, no_sync, no_remote, **options):
    """Search package names and descriptions for TERMS."""
    engine = build_engine(ctx, Operation.SEARCH, options)
    exit_with(engine.search(list(terms), sync=not no_sync, remote=not no_remote))


@cli.command()
@click.argument('targets', nargs=-1)
@query_options
@click.option('--foreign', 'aur_foreign', is_flag=True,
              help='Only foreign packages, compared with the remote repository')
@click.pass_context
@handle_errors
def query(ctx, targets, **options):
    """List installed packages, optionally restricted to TARGETS."""
    engine = build_engine(ctx, Operation.QUERY, options)
    exit_with(engine.query(list(targets)))


@cli.command(name='list-repo')
@click.argument('repositories', nargs=-1)
@query_options
@click.pass_context
@handle_errors
def list_repo(ctx, repositories, **options):
    """List every package of REPOSITORIES (all sync repositories by default)."""
    engine = build_engine(ctx, Operation.LIST_REPO, options)
    exit_with(engine.list_repositories(list(repositories)))


@cli.command()
@query_options
@click.option('--aur', 'aur_upgrades', is_flag=True,
              help='Only check foreign packages against the remote repository')
@click.pass_context
@handle_errors
def upgrades(ctx, aur_upgrades, **options):
    """List installed packages with a newer version available."""
    if aur_upgrades:
        engine = build_engine(ctx, Operation.QUERY, options, aur_upgrades=True)
    else:
        engine = build_engine(ctx, Operation.QUERY, options, list_upgrades=True)
    exit_with(engine.upgrades())


@cli.command()
@click.argument('targets', nargs=-1, required=True)
@query_options
@click.pass_context
@handle_errors
def info(ctx, targets, **options):
    """Show the sync or remote packages named by TARGETS."""
    engine = build_engine(ctx, Operation.INFO, options)
    exit_with(engine.info(list(targets)))


def main() -> int:
    """Main CLI entry point."""
    try:
        cli(standalone_mode=False)
        return 0
    except click.ClickException as e:
        e.show()
        return e.exit_code
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 130
    except SystemExit as e:
        return e.code
    except Exception as e:
        console.print(f"[red]Unexpected error:[/red] {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())

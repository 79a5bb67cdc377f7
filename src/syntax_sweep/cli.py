"""Command-line interface for syntax-sweep."""
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from syntax_sweep.__version__ import __version__
from syntax_sweep.config import CONFIG_FILENAME, load_config
from syntax_sweep.logging_config import get_logger, setup_logging
from syntax_sweep.reporter import get_exit_code
from syntax_sweep.suite import run_suite

BANNER = [
    "=" * 60,
    "SYNTAX VALIDATION",
    "=" * 60,
]


@click.command()
@click.version_option(version=__version__, prog_name="syntax-sweep")
@click.option("--verbose", is_flag=True, help="Enable verbose logging")
@click.option("--debug", is_flag=True, help="Log checker commands and worker threads")
@click.option("--quiet", is_flag=True, help="Suppress warnings (errors only)")
@click.option("--config", type=click.Path(exists=True), help="Path to config file")
@click.option("--sequential", is_flag=True, help="Validate one kind at a time")
def main(
    verbose: bool, debug: bool, quiet: bool, config: str | None, sequential: bool
) -> None:
    """Syntax-sweep: validate a project's script and markup files."""
    setup_logging(verbose=verbose, quiet=quiet, debug=debug)

    project_root = Path.cwd()
    config_path = Path(config) if config else project_root / CONFIG_FILENAME

    try:
        cfg = load_config(config_path)
        if sequential:
            cfg = cfg.model_copy(update={"parallel": False})

        for line in BANNER:
            click.echo(line)

        verdict = run_suite(project_root, cfg)
        sys.exit(get_exit_code(verdict))

    except KeyboardInterrupt:
        click.echo("\nOperation cancelled by user", err=True)
        sys.exit(130)
    except (ValueError, ValidationError) as e:
        click.echo(f"Error: invalid configuration: {e}", err=True)
        sys.exit(2)
    except Exception as e:
        logger = get_logger(__name__)
        logger.exception("Unexpected error during execution")
        click.echo(
            f"An unexpected error occurred: {e}\n" "Run with --verbose for details.", err=True
        )
        sys.exit(2)


if __name__ == "__main__":
    main()

import asyncio
import hashlib
import logging
import sys

import click

from . import __version__ as VERSION
from .assertions import expect_matches_golden
from .comparator import GoldenFileComparator
from .config import refresh_config
from .errors import GoldenMismatchError, GoldfileError, MissingGoldenFileError

logger = logging.getLogger(__name__)


def _read_candidate(candidate):
    with open(candidate, "rb") as handle:
        return handle.read()


def _comparator(basedir, tolerance=None):
    config = refresh_config()
    return GoldenFileComparator(
        basedir or config.golden_dir,
        config.tolerance if tolerance is None else tolerance,
    )


def _emit_error(exc: GoldfileError, exit_code: int) -> None:
    click.echo(f"Error [{exc.category}:{exc.error_code}]: {exc.explanation}", err=True)
    sys.exit(exit_code)


@click.group(invoke_without_command=True)
@click.pass_context
@click.option("--version", is_flag=True, help="Show the version and exit.")
@click.option("--verbose", is_flag=True, help="Log file-system activity to stderr.")
def main(ctx, version, verbose):
    """goldfile: golden-image comparison CLI"""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    if version:
        click.echo(f"goldfile version {VERSION}")
        return
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@main.command()
@click.argument("candidate", type=click.Path(exists=True, dir_okay=False))
@click.argument("golden")
@click.option("--basedir", help="Directory goldens are resolved against (default: config golden_dir)")
@click.option("--tolerance", type=click.FloatRange(0.0, 1.0), help="Allowed fraction of differing pixels")
@click.option("--failures/--no-failures", default=None, help="Write diff images when the comparison fails")
def compare(candidate, golden, basedir, tolerance, failures):
    """Compare CANDIDATE image against GOLDEN."""
    comparator = _comparator(basedir, tolerance)
    image_bytes = _read_candidate(candidate)
    try:
        asyncio.run(expect_matches_golden(comparator, image_bytes, golden, update=False, write_failures=failures))
    except MissingGoldenFileError as exc:
        _emit_error(exc, exit_code=2)
    except GoldenMismatchError as exc:
        click.echo(exc.explanation)
        sys.exit(1)
    click.echo(f"Golden {golden} matches {candidate}.")


@main.command()
@click.argument("candidate", type=click.Path(exists=True, dir_okay=False))
@click.argument("golden")
@click.option("--basedir", help="Directory goldens are resolved against (default: config golden_dir)")
def update(candidate, golden, basedir):
    """Overwrite GOLDEN with the bytes of CANDIDATE."""
    comparator = _comparator(basedir)
    asyncio.run(comparator.update(golden, _read_candidate(candidate)))
    click.echo(f"Golden updated: {comparator.resolve(golden)}")


@main.command()
@click.argument("golden")
@click.option("--basedir", help="Directory goldens are resolved against (default: config golden_dir)")
def show(golden, basedir):
    """Show where GOLDEN lives and what it contains."""
    comparator = _comparator(basedir)
    try:
        data = asyncio.run(comparator.get_golden_bytes(golden))
    except MissingGoldenFileError as exc:
        _emit_error(exc, exit_code=2)
    click.echo(f"path: {comparator.resolve(golden)}")
    click.echo(f"size: {len(data)} bytes")
    click.echo(f"sha256: {hashlib.sha256(data).hexdigest()}")


if __name__ == "__main__":
    main()

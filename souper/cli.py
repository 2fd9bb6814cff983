"""CLI entry point: souper.

    souper -o soups.json                          # scan the current directory
    souper -o soups.json -d repo -e repo/vendor   # scan repo, skip repo/vendor
    souper -o soups.json -m requirements -m risk  # add empty annotation keys
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from souper import __version__
from souper.core.logging import setup_logging
from souper.exceptions import SouperError
from souper.pipeline import run


def _default_meta(meta_keys: tuple[str, ...]) -> dict[str, str]:
    return {key: "" for key in meta_keys}


@click.command()
@click.version_option(__version__, prog_name="souper")
@click.option(
    "-o",
    "--output-file",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file to write the report to",
)
@click.option(
    "-d",
    "--directory",
    "root_dir",
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory to scan (default: current directory)",
)
@click.option(
    "-e",
    "--exclude-directory",
    "exclude_dirs",
    multiple=True,
    type=click.Path(path_type=Path),
    help="Directory to exclude (repeatable)",
)
@click.option(
    "-m",
    "--meta-key",
    "meta_keys",
    multiple=True,
    envvar="SOUPER_META_KEYS",
    help="Key to add in meta property (repeatable)",
)
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(
    output_file: Path,
    root_dir: Path | None,
    exclude_dirs: tuple[Path, ...],
    meta_keys: tuple[str, ...],
    verbose: bool,
) -> None:
    """Scan a repository for software of unknown provenance (SOUP) and report it."""
    setup_logging("DEBUG" if verbose else None)

    root_dir = root_dir or Path.cwd()
    try:
        run(output_file, root_dir, exclude_dirs, _default_meta(meta_keys))
    except SouperError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()

"""Command-line interface for risimport.

Commands
--------
parse   Decode RIS files into a JSONL file of entries
sniff   Check whether a file looks like RIS
run     Audited import into an output directory
"""

import sys
from pathlib import Path
from typing import NoReturn

import click

from risimport import __version__

__all__ = ["cli"]

_input_argument = click.argument("input_path", type=click.Path(exists=True, path_type=Path))
_recursive_option = click.option(
    "--recursive", "-r", is_flag=True, help="Descend into subdirectories of a folder input"
)
_verbose_option = click.option("--verbose", "-v", is_flag=True, help="Print progress to stderr")


def _fail(message: str) -> NoReturn:
    click.secho(f"✗ {message}", fg="red", err=True)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="risimport")
def cli() -> None:
    """Decode RIS bibliographic exports into structured entries.

    Use 'risimport COMMAND --help' for command-specific help.
    """


@cli.command()
@_input_argument
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    required=True,
    help="JSONL file to write",
)
@_recursive_option
@_verbose_option
def parse(input_path: Path, output: Path, recursive: bool, verbose: bool) -> None:
    """Decode INPUT_PATH (a RIS file or a folder of .ris/.txt files) to JSONL.

    Any file that cannot be decoded aborts the command.

    Examples
    --------
        risimport parse references.ris -o entries.jsonl
        risimport parse exports/ -o entries.jsonl --recursive
    """
    from risimport import ParseError, parse_file, parse_folder, write_jsonl

    try:
        if input_path.is_dir():
            if verbose:
                click.echo(f"Parsing folder {input_path} (recursive={recursive})", err=True)
            entries = parse_folder(input_path, recursive=recursive, strict=True)
        else:
            if verbose:
                click.echo(f"Parsing file {input_path}", err=True)
            entries = parse_file(input_path)
    except ParseError as e:
        _fail(f"Error: {e}")

    if verbose:
        click.echo(f"Writing {len(entries)} entries to {output}", err=True)

    try:
        written = write_jsonl(entries, output)
    except OSError as e:
        _fail(f"Error: cannot write {output}: {e}")

    click.secho(f"✓ Successfully wrote {written} entries to {output}", fg="green")


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def sniff(input_path: Path) -> None:
    """Report whether INPUT_PATH contains a RIS record.

    Exits with status 0 if a 'TY  -' line is found, 1 otherwise. A UTF-8
    byte-order mark is ignored.
    """
    from risimport import is_recognized_format

    with input_path.open(encoding="utf-8-sig", errors="replace") as f:
        recognized = is_recognized_format(f)

    if not recognized:
        click.echo(f"{input_path}: not RIS")
        sys.exit(1)

    click.echo(f"{input_path}: RIS")


@cli.command()
@_input_argument
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("out"),
    show_default=True,
    help="Directory for entries, reports and the event log",
)
@_recursive_option
@click.option("--encoding", default=None, help="Codec for every file (default: detect per file)")
@click.option("--strict", is_flag=True, help="Fail if any file cannot be decoded")
@click.option("--no-audit", is_flag=True, help="Do not write events.jsonl")
@_verbose_option
def run(
    input_path: Path,
    output_dir: Path,
    recursive: bool,
    encoding: str | None,
    strict: bool,
    no_audit: bool,
    verbose: bool,
) -> None:
    """Import INPUT_PATH into OUTPUT_DIR with a full audit trail.

    Writes entries.jsonl, reports/ingestion_report.json and, unless
    --no-audit is given, events.jsonl.

    Examples
    --------
        risimport run references.ris
        risimport run exports/ -o results --recursive --strict
    """
    from risimport.engine import ImportConfig, run_import

    try:
        config = ImportConfig(
            output_dir=output_dir,
            recursive=recursive,
            encoding=encoding,
            strict=strict,
            write_audit_log=not no_audit,
        )
    except ValueError as e:
        _fail(f"Error: {e}")

    if verbose:
        click.echo(f"Importing {input_path} into {output_dir}", err=True)

    result = run_import(input_path, config)

    if not result.success:
        _fail(f"Import failed: {result.error_message}")

    if verbose:
        for name, path in result.output_files.items():
            click.echo(f"  {name}: {path}", err=True)

    click.secho(
        f"✓ Imported {result.total_records} entries from {result.total_files} file(s) "
        f"({result.total_warnings} warnings, {result.total_errors} errors)",
        fg="green",
    )


if __name__ == "__main__":
    cli()

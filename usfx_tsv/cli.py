"""
Converts a USFX scripture document into tab-separated verse records.
Each verse becomes one line: book, chapter, verse, then the verse text.
"""

from __future__ import annotations

from dataclasses import replace

import click
from .config import ConfigError, build_config
from .converter import convert_file
from .exceptions import ConversionError
from .filesystem import get_buffer_size, normalize_filepath

__all__ = ["cli"]


@click.command()
@click.version_option()
@click.option(
    "-o",
    "--output",
    default="-",
    show_default=True,
    type=click.Path(dir_okay=False, allow_dash=True),
    help="Output file ('-' for standard output)",
)
@click.option("--buffer-size", type=int, help="Bytes read from the input per chunk")
@click.option(
    "--trim-text/--no-trim-text",
    default=None,
    help="Strip whitespace around text and drop whitespace-only text",
)
@click.option("--debug/--no-debug", default=None, help="Report diagnostics on standard error")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def cli(
    filepath: str,
    output: str = "-",
    buffer_size: int | None = None,
    trim_text: bool | None = None,
    debug: bool | None = None,
):
    """
    Entry point for converting a USFX file to TSV.

    Args:
        filepath: Path to the USFX document to convert.
        output: Destination file, or ``-`` for standard output.
        buffer_size: Override for the read-chunk size in bytes.
        trim_text: Override for whitespace trimming of text payloads.
        debug: Override for diagnostic output on standard error.

    Returns:
        None.

    Raises:
        click.BadParameter: If the input path is invalid or the configuration
            contains unsupported values.
        click.ClickException: If the input cannot be read, the markup is
            malformed, or the output cannot be written.

    Examples:
        usfx-tsv engnet_usfx.xml -o engnet.tsv --no-trim-text
    """
    try:
        source = normalize_filepath(filepath)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error

    try:
        config = build_config(
            source.parent,
            buffer_size=buffer_size,
            trim_text=trim_text,
            debug_output=debug,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    if buffer_size is None:
        try:
            config = replace(config, buffer_size=get_buffer_size(default=config.buffer_size))
        except ValueError as error:
            raise click.ClickException(str(error)) from error

    def warn(message: str) -> None:
        click.echo(message, err=True)

    try:
        with click.open_file(output, "w", encoding="utf-8") as sink:
            records = convert_file(source, sink, config, debug=warn)
    except ConversionError as error:
        raise click.ClickException(f"{source}: {error}") from error
    except OSError as error:
        raise click.ClickException(f"Error writing {output}: {error}") from error

    if config.debug_output:
        warn(f"Wrote {records} records")


if __name__ == "__main__":
    cli()

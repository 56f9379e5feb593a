"""splitarc - Split archive encoder / decoder."""
from __future__ import annotations

import logging
from pathlib import Path

import click

from splitarc_core.errors import ArchiveError
from splitarc_core.sizes import parse_size
from splitarc_pack.writer import pack_files
from splitarc_unpack.extract import unpack_archive


def _fail(e: ArchiveError) -> None:
    # Fail closed, with a single-line reason.
    click.echo(f"FATAL: {e}", err=True)
    raise SystemExit(1)


@click.group(context_settings={"auto_envvar_prefix": "SPLITARC"})
@click.option("-v", "--verbose", is_flag=True, help="Log progress to stderr.")
def main(verbose: bool) -> None:
    """Pack files into size-capped segments and unpack them again."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command("encode")
@click.argument("max_size")
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("inputs", nargs=-1, required=True, type=click.Path(path_type=Path))
def encode_cmd(max_size: str, output: Path, inputs: tuple[Path, ...]) -> None:
    """Encode INPUTS into OUTPUT (manifest) and OUTPUT_data<N> segments.

    MAX_SIZE caps each segment: 5K -> 5 KiB, 7M -> 7 MiB, 13G -> 13 GiB,
    0 -> unlimited.
    """
    try:
        limit = parse_size(max_size)
        manifest = pack_files(inputs, output, limit)
    except ArchiveError as e:
        _fail(e)
    click.echo(f"Wrote {manifest.total_bytes} bytes to {manifest.segment_count} segment(s).")


@main.command("decode")
@click.argument("manifest", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--out-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Directory the extracted files and parser.log are written to.",
)
def decode_cmd(manifest: Path, out_dir: Path) -> None:
    """Reassemble the segments of MANIFEST and extract every file."""
    try:
        names = unpack_archive(manifest, out_dir)
    except ArchiveError as e:
        _fail(e)
    click.echo(f"Extracted {len(names)} file(s).")


if __name__ == "__main__":
    main()

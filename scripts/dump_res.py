"""Dump the header comment and directory of a RES archive.

Usage:
    python -m scripts.dump_res PATH [--id ID ...] [--extract DIR] [--no-preload] [-v]
"""

import argparse
from pathlib import Path

from lgres.config import ReaderConfig
from lgres.errors import ResError, UnsupportedResourceError
from lgres.logging import configure_logging, get_logger
from lgres.models.constants import RESOURCE_TYPE_NAMES, ResourceFlags
from lgres.models.records import DirectoryEntry
from lgres.parser.res_reader import ResReader


def parse_resource_id(text: str) -> int:
    """Parse a decimal or 0x-prefixed hex resource ID for argparse."""
    try:
        value = int(text, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid resource ID: {text!r}")
    if not 0 < value <= 0xFFFF:
        raise argparse.ArgumentTypeError(f"resource ID out of range 1..65535: {text!r}")
    return value


def format_flags(flags: int) -> str:
    names = [member.name for member in ResourceFlags if flags & member]
    return "|".join(names) if names else "-"


def format_entry(index: int, offset: int, entry: DirectoryEntry) -> str:
    """Format one directory row: index, ID, type, lengths, offset, flags."""
    rid = "deleted" if entry.is_deleted else f"0x{entry.id:04X}"
    return (
        f"{index:>5} | {rid:>7} | {entry.type.name:<16} | "
        f"{entry.uncompressed_len:>8} | {entry.compressed_len:>8} | "
        f"{offset:>10} | {format_flags(entry.flags)}"
    )


def comment_preview(comment: bytes) -> str:
    """Printable form of the raw header comment, cut at the first NUL."""
    return comment.split(b"\x00", 1)[0].decode("utf-8", errors="replace").rstrip()


def extract_name(entry: DirectoryEntry) -> str:
    return f"{entry.id:05d}.{RESOURCE_TYPE_NAMES[entry.type]}.bin"


def extract(reader: ResReader, wanted: set[int] | None, out_dir: Path) -> tuple[int, int]:
    """Write selected resources to out_dir. Returns (written, skipped)."""
    out_dir.mkdir(parents=True, exist_ok=True)
    written = skipped = 0
    for entry in reader.directory:
        if entry.is_deleted or (wanted is not None and entry.id not in wanted):
            continue
        try:
            resource = reader.get(entry.id)
        except UnsupportedResourceError as exc:
            print(f"Skipping: {exc}")
            skipped += 1
            continue
        (out_dir / extract_name(entry)).write_bytes(resource.data)
        written += 1
    return written, skipped


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Dump a Looking Glass RES archive")
    parser.add_argument("res", type=Path, help="RES archive path")
    parser.add_argument("--id", dest="ids", type=parse_resource_id, action="append",
                        help="Only show this resource ID; repeatable (decimal or 0x hex)")
    parser.add_argument("--extract", type=Path, metavar="DIR",
                        help="Write raw resource bytes into DIR")
    parser.add_argument("--no-preload", action="store_true",
                        help="Do not load LOAD_ON_OPEN resources when opening")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Show debug log output on stderr")
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    logger = get_logger()

    if not args.res.exists():
        print(f"Error: {args.res} not found")
        return 1

    config = ReaderConfig(preload_on_open=not args.no_preload)
    wanted = set(args.ids) if args.ids else None

    try:
        with ResReader.from_path(args.res, config) as reader:
            print(f"Comment: {comment_preview(reader.comment)}")
            print(f"Data segment: {reader.data_offset}")
            print()
            print("Index |      ID | Type             | Length   | Stored   | Offset     | Flags")
            shown = 0
            offset = reader.data_offset
            for index, entry in enumerate(reader.directory):
                if wanted is None or entry.id in wanted:
                    print(format_entry(index, offset, entry))
                    shown += 1
                offset += entry.compressed_len
            print()
            print(f"Total: {shown} of {len(reader.directory)} entries")

            if args.extract is not None:
                written, skipped = extract(reader, wanted, args.extract)
                logger.info("Extracted %d resources to %s", written, args.extract)
                print(f"Extracted {written} resources ({skipped} unsupported)")
    except (ResError, OSError) as exc:
        print(f"Error: {exc}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

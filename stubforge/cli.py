#!/usr/bin/env python3
import argparse
import logging
import os
import sys
from pathlib import Path

from stubforge import config
from stubforge.adapters.java_adapter import ARCHIVE_SUFFIXES
from stubforge.errors import ImplementorError
from stubforge.implementor import Implementor


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stubforge",
        description="Generate a default-valued <Name>Impl stub for a Java interface or abstract class",
    )
    parser.add_argument("type_name", nargs="?", help="Fully qualified name of the type to implement")
    parser.add_argument(
        "-jar",
        nargs=2,
        metavar=("TYPE_NAME", "ARCHIVE_PATH"),
        help="Generate, compile and pack <Name>Impl.jar into ARCHIVE_PATH",
    )
    parser.add_argument(
        "-sp", "--source-path",
        help=f"Source roots separated by '{os.pathsep}' (directories or .jar/.zip archives)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, config.LOG_LEVEL, logging.WARNING),
        format=config.LOG_FORMAT,
    )

    if not args.jar and not args.type_name:
        parser.print_usage(sys.stderr)
        print("Error: Invalid call format", file=sys.stderr)
        return 1

    source_path = None
    if args.source_path:
        source_path = [Path(p) for p in args.source_path.split(os.pathsep) if p]

    try:
        if args.jar:
            type_name, archive_path = args.jar
            out_dir = Path(archive_path)
            roots = list(source_path if source_path is not None else config.SOURCE_PATH)
            # an archive given here is read as a source root; the jar goes next to it
            if out_dir.suffix.lower() in ARCHIVE_SUFFIXES and out_dir.is_file():
                roots.append(out_dir)
                out_dir = out_dir.parent
            result = Implementor(source_path=roots).implement_jar(type_name, out_dir)
            print(f"Wrote {result.archive_path}")
        else:
            result = Implementor(source_path=source_path).implement(args.type_name, Path("."))
            print(f"Wrote {result.source_path}")
    except ImplementorError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

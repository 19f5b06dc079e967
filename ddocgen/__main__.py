#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Command line renderer.

    python -m ddocgen page.txt -m std.ddoc -m site.ddoc -o out/

Each source is rendered to OUTDIR/<stem>.html, or to stdout when no output
directory is given.  Macro files given with -m are layered after the
configured DDOC_MACRO_FILES, in order.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from ddocgen import __version__
from ddocgen.core.config import get_settings
from ddocgen.core.errors import DdocError
from ddocgen.services.macros import load_macro_files, register_all_builtins
from ddocgen.services.renderer import RenderPipeline

logger = logging.getLogger("ddocgen")

EXIT_OK = 0
EXIT_ERROR = 1


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="ddocgen", description="Render documentation text with macro tables.")
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("sources", nargs="+", type=Path, metavar="SOURCE",
                        help="documentation text files to render")
    parser.add_argument("-m", "--macros", action="append", default=[], type=Path, metavar="MACROFILE",
                        help="macro definition file (repeatable; later files win)")
    parser.add_argument("-o", "--output-dir", type=Path, default=None, metavar="OUTDIR",
                        help="write <stem>.html files here instead of stdout")
    parser.add_argument("--title", default=None, help="page title (defaults to the file stem)")
    parser.add_argument("--no-wrap", action="store_true",
                        help="expand macros only; do not wrap the output in $(DDOC)")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = get_settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )
    register_all_builtins()

    try:
        loaded = load_macro_files([*settings.macro_files, *args.macros])
    except DdocError as exc:
        logger.error("%s", exc)
        return EXIT_ERROR

    pipeline = RenderPipeline()
    if args.output_dir is not None:
        try:
            args.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.error("Cannot create %s: %s", args.output_dir, exc.strerror or exc)
            return EXIT_ERROR

    status = EXIT_OK
    for source in args.sources:
        try:
            text = source.read_text(encoding="utf-8")
        except OSError as exc:
            logger.error("Cannot read %s: %s", source, exc.strerror or exc)
            status = EXIT_ERROR
            continue

        if args.no_wrap:
            result = pipeline.render_text(text, loaded.table)
        else:
            title = args.title if args.title is not None else (settings.default_title or source.stem)
            result = pipeline.render_document(text, loaded.table, title=title)

        if args.output_dir is None:
            sys.stdout.write(result.output)
        else:
            target = args.output_dir / f"{source.stem}.html"
            try:
                target.write_text(result.output, encoding="utf-8")
            except OSError as exc:
                logger.error("Cannot write %s: %s", target, exc.strerror or exc)
                status = EXIT_ERROR
            else:
                logger.info("Wrote %s", target)

    return status


if __name__ == "__main__":
    sys.exit(main())

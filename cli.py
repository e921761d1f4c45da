import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from adapters.easyeda.easyeda_api import EasyEDAApi
from constants import CACHE_DIR, LIB_NAME, LIBRARY_DIR
from library_manager import LibraryManager

logger = logging.getLogger("CLI")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Import LCSC/EasyEDA parts into a KiCad library."
    )
    parser.add_argument(
        "lcsc_ids",
        nargs="+",
        metavar="lcsc_id",
        help="LCSC Part Number(s) to import (e.g., C2040).",
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        type=Path,
        default=LIBRARY_DIR,
        help=f"KiCad library directory (default: {LIBRARY_DIR}).",
    )
    parser.add_argument(
        "--lib-name",
        default=LIB_NAME,
        help="Library nickname used in the symbols' Footprint property.",
    )
    parser.add_argument(
        "--cache",
        action="store_true",
        help=f"Cache API responses in <output-dir>/{CACHE_DIR}.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging."
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main function for the CLI tool."""
    args = build_parser().parse_args(argv)

    # --- Basic Logging Setup ---
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stdout,
    )

    api = EasyEDAApi(cache_dir=args.output_dir / CACHE_DIR if args.cache else None)
    library_manager = LibraryManager(root=args.output_dir, api=api, lib_name=args.lib_name)

    failures = 0
    try:
        for lcsc_id in args.lcsc_ids:
            result = library_manager.import_component(lcsc_id)
            if result.success:
                logger.info(str(result))
            else:
                failures += 1
                logger.error(str(result))
    except KeyboardInterrupt:
        logger.info("\nProcess interrupted by user. Exiting.")
        return 1

    logger.info(f"Imported {len(args.lcsc_ids) - failures} of {len(args.lcsc_ids)} parts into {args.output_dir}")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())

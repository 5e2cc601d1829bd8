"""Entry point: print book progress for one location in a directory of chapters."""

import argparse
import asyncio
import json
import logging
import sys

from reading_progress.config import load_config
from reading_progress.ingestion import BookLoader
from reading_progress.progress import BookProgress, OffsetResolver


def main() -> int:
    """Load the book, resolve the location and print its progress as JSON."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("book_dir", help="Directory of HTML section files")
    parser.add_argument("location", help='Location as "<section>:<offset>"')
    parser.add_argument("--config", default="config.yaml", help="YAML config file")
    parser.add_argument(
        "--non-linear",
        action="append",
        default=[],
        metavar="FILE",
        help="Section file excluded from the reading order (repeatable)",
    )
    args = parser.parse_args()

    config = load_config(args.config)
    logging.basicConfig(
        level=config.app.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    book = BookLoader().load_directory(args.book_dir, non_linear=args.non_linear)
    progress = BookProgress(book, OffsetResolver(), config=config.progress)
    result = asyncio.run(progress.get_book_progress(args.location))

    print(json.dumps(result.model_dump() if result else None, indent=2))
    return 0 if result else 1


if __name__ == "__main__":
    sys.exit(main())

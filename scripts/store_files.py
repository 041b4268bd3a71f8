"""Store local files in the upload root with the configured rules.

Usage:
    python -m scripts.store_files photo.png scan.jpg
"""

import argparse
import sys

from uploader.core.exceptions import UploadError
from uploader.dependencies import get_uploader
from uploader.services.file_entry import LocalFileEntry


def store_files(paths: list[str]) -> list[str]:
    """Validate and copy ``paths`` into the upload root, stopping at the first failure."""
    field = "files"
    entries = [LocalFileEntry(path) for path in paths]
    return get_uploader().process(field, {field: entries})


def main() -> None:
    parser = argparse.ArgumentParser(description="Store local files in the upload root")
    parser.add_argument("paths", nargs="+", help="Files to store")
    args = parser.parse_args()

    try:
        stored = store_files(args.paths)
    except UploadError as e:
        print(f"Upload rejected: {e.message} ({e.code})", file=sys.stderr)
        sys.exit(1)

    for name in stored:
        print(name)


if __name__ == "__main__":
    main()

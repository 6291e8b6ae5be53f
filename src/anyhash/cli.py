"""anyhash CLI: digest JSON documents with the canonical encoding."""

import argparse
import json
import logging
import sys
from importlib.metadata import version as get_version, PackageNotFoundError
from pathlib import Path
from typing import Any, List

from pydantic import ValidationError

logger = logging.getLogger(__name__)

STDIN = "-"


def _load_json(source: str) -> Any:
    if source == STDIN:
        return json.load(sys.stdin)
    with open(Path(source), "r", encoding="utf-8") as f:
        return json.load(f)


def main(argv: List[str] = None):
    """Main CLI entry point for anyhash."""
    try:
        anyhash_version = get_version("anyhash")
    except PackageNotFoundError:
        anyhash_version = "dev"

    parser = argparse.ArgumentParser(
        prog="anyhash",
        description="anyhash: order-independent digests of JSON documents"
    )
    parser.add_argument("--version", action="version", version=f"anyhash {anyhash_version}")
    parser.add_argument(
        "inputs",
        nargs="*",
        default=[STDIN],
        help="JSON files to digest ('-' for stdin, the default)"
    )
    parser.add_argument(
        "--algorithm",
        default="sha256",
        help="Output digest algorithm (any fixed-length hashlib name)"
    )
    parser.add_argument(
        "--key-hash",
        dest="key_hash_algorithm",
        default="md5",
        help="Auxiliary digest used to order object keys"
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Fail instead of nesting deeper than this"
    )
    parser.add_argument(
        "--raw",
        action="store_true",
        help="Print the canonical stream as hex instead of its digest"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress warnings; errors are still reported."
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.ERROR if args.quiet else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    # Lazy import keeps --help and --version cheap
    from anyhash.api import canonical_bytes, digest
    from anyhash.config import HasherConfig
    from anyhash.sinks import is_supported_algorithm

    if not args.raw and not is_supported_algorithm(args.algorithm):
        parser.error(f"unknown algorithm: {args.algorithm}")
    try:
        config = HasherConfig(key_hash_algorithm=args.key_hash_algorithm, max_depth=args.max_depth)
    except ValidationError as e:
        parser.error(f"invalid configuration: {e.errors()[0]['msg']}")

    failed = False
    for source in args.inputs:
        try:
            document = _load_json(source)
        except (OSError, ValueError) as e:
            logger.error("Cannot read %s: %s", source, e)
            failed = True
            continue

        try:
            if args.raw:
                out = canonical_bytes(document, config).hex()
            else:
                out = digest(document, args.algorithm, config).hex()
        except RecursionError as e:
            logger.error("Cannot digest %s: %s", source, e)
            failed = True
            continue
        print(f"{out}  {source}")

    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()

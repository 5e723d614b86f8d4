"""
Entry point for the Markdown to Prismic bundle tool.

Usage:
  python main.py newsitem
  python main.py event --export prismic_export.zip
  python main.py list
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from prismic_bundler.bundle_tool import PrismicBundleTool
from prismic_bundler.bundlers.content_types import CONTENT_TYPES
from prismic_bundler.utils.errors import BundleError
from prismic_bundler.utils.pre_flight_checks import run_pre_flight_checks

CONFIG_FILE = "config/bundle_config.json"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Bundle Markdown content into a ZIP archive for Prismic import.",
    )
    parser.add_argument(
        "--config",
        default=CONFIG_FILE,
        help=f"Path of the JSON configuration file (default: {CONFIG_FILE})",
    )
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("list", help="List the known content types")

    for name in sorted(CONTENT_TYPES):
        cmd = sub.add_parser(name, help=f"Bundle {name} documents")
        cmd.add_argument(
            "--export",
            default=None,
            help="Prismic export archive; documents found in it are written as updates",
        )
        cmd.add_argument(
            "--output",
            default=None,
            help="Path of the archive to write (default: <prismic_type>_upload.zip)",
        )
        cmd.add_argument(
            "--converter",
            choices=["subprocess", "local"],
            default=None,
            help="Rich text converter to use (overrides the configuration)",
        )
        cmd.add_argument(
            "--skip-checks",
            action="store_true",
            help="Do not run the pre-flight checks",
        )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.WARNING, format="[%(levelname)s] %(message)s")
    tool = PrismicBundleTool(config_file=args.config)

    if args.command == "list":
        for name in sorted(CONTENT_TYPES):
            ct = tool.content_type(name)
            print(f"{name}\t{ct.source_glob}\t-> {ct.archive_name}")
        return 0

    if args.converter:
        tool.config["rich_text"]["converter"] = args.converter

    try:
        content_type = tool.content_type(args.command)
        if not args.skip_checks:
            run_pre_flight_checks(tool.config, content_type)
        tool.bundle(content_type, export=args.export, output=args.output)
    except BundleError as exc:
        tool.log_message(str(exc), level="ERROR")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

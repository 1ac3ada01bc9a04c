"""
Evaluate a field rule document against a saved HTML page.

Usage:
  python -m content_fields RULES PAGE [--base-url URL] [--template RULES] [--summary] [--debug]

Example:
  python -m content_fields rules/example.com.yaml page.html --base-url https://example.com/news/1

Exit codes: 0 on success, 1 if the rules (or page) cannot be loaded,
2 if the page is rejected by its root or validator field.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import load_config, load_fields
from .exceptions import ConfigurationError
from .parsers.base import FieldsParser

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_REJECTED = 2

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="content_fields",
        description="Extract the configured fields of an HTML page and print them as JSON",
    )
    parser.add_argument("rules", help="YAML or JSON rule document")
    parser.add_argument("page", help="HTML file, or - to read the page from stdin")
    parser.add_argument("--base-url", help="URL of the page, used to resolve relative links")
    parser.add_argument("--template", help="Rule document the rules override")
    parser.add_argument("--summary", action="store_true", help="Include a summary of the body")
    parser.add_argument("--debug", action="store_true", help="Log selector, filter and date parsing details")
    return parser


def read_page(page: str) -> bytes:
    if page == "-":
        return sys.stdin.buffer.read()
    return Path(page).read_bytes()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        template = load_config(args.template) if args.template else None
        fields = load_fields(args.rules, template=template)
        html = read_page(args.page)
    except ConfigurationError as e:
        print(f"Invalid rules: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except OSError as e:
        print(f"Cannot read page {args.page}: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    parser = FieldsParser(html, fields, base_url=args.base_url)
    result = parser.parse()

    output = result.to_dict()
    if args.summary and not result.rejected:
        output["summary"] = parser.parse_summary()
    print(json.dumps(output, indent=2, ensure_ascii=False))

    return EXIT_REJECTED if result.rejected else EXIT_OK


if __name__ == "__main__":
    sys.exit(main())

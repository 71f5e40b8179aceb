"""Convert NLM/JATS article XML files to article graph JSON.

Usage:
    jatsgraph-convert article.xml -o article.json
    jatsgraph-convert article.xml --strict --verbose
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from jatsgraph.config import load_config
from jatsgraph.converter import LensConverter
from jatsgraph.errors import ImporterError
from jatsgraph.logging import setup_logging
from jatsgraph.storage.memory import InMemoryArticle


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Convert an NLM/JATS article to an article graph (JSON).")
    parser.add_argument("input", type=Path, help="Article XML file")
    parser.add_argument("-o", "--output", type=Path, default=None, help="Output JSON file (default: stdout)")
    parser.add_argument("--config", type=Path, default=None, help="Path to a jatsgraph.toml")
    parser.add_argument("--strict", action="store_true", default=None, help="Fail on unsupported content")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log conversion stages")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_config(args.config, strict=args.strict)
    logger = setup_logging(logging.DEBUG if args.verbose else settings.log_level, name="jatsgraph")
    # gaps are printed below; keep the run from logging them as well
    setup_logging(logging.ERROR, name="jatsgraph.state")

    try:
        raw = args.input.read_bytes()
    except OSError as e:
        logger.error(f"Cannot read {args.input}: {e}")
        return 2

    doc = InMemoryArticle()
    try:
        result = LensConverter(settings).convert(raw, doc)
    except ImporterError as e:
        print(f"error: {args.input}: {e}", file=sys.stderr)
        return 1

    for gap in result.diagnostics:
        print(f"skipped: {gap}", file=sys.stderr)

    payload = json.dumps(doc.to_dict(), indent=2, ensure_ascii=False)
    if args.output is None:
        print(payload)
    else:
        args.output.write_text(payload + "\n", encoding="utf-8")
        logger.info(f"Wrote {args.output} ({len(doc.nodes)} nodes, {len(doc.annotations)} annotations)")
    return 0


if __name__ == "__main__":
    sys.exit(main())

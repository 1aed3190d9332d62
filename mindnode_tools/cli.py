"""Command-line interface for mindnode-tools."""

from __future__ import annotations

import argparse
import json
import logging
import random
import sys
from pathlib import Path

from . import convert_archive, convert_graph, parse_ids, read
from .errors import MindNodeError
from .reader import find_documents
from .writer import document_to_dict, output_path, write

logger = logging.getLogger("mindnode_tools")

# Per-document failures that are reported and skipped rather than raised.
CONVERSION_ERRORS = (MindNodeError, OSError, json.JSONDecodeError)


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="mindnode-tools",
        description="Convert MindNode mind maps to archival JSON and force-layout graphs",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and errors")
    sub = parser.add_subparsers(dest="command", required=True)

    # --- archive ---
    p_archive = sub.add_parser("archive", help="Convert to flat text-keyed JSON")
    p_archive.add_argument("input", help="MindNode .json file or directory of them")
    p_archive.add_argument("output", help="Output file or directory")

    # --- graph ---
    p_graph = sub.add_parser("graph", help="Convert to node/link graph JSON")
    p_graph.add_argument("input", help="MindNode .json file or directory of them")
    p_graph.add_argument("output", help="Output file or directory")
    p_graph.add_argument("--seed", type=int, help="Seed for node/link pinning (default: random)")

    # --- ids ---
    p_ids = sub.add_parser("ids", help="Rewrite node ids to their display text")
    p_ids.add_argument("file", help="Path to MindNode .json file")
    p_ids.add_argument("-o", "--output", help="Output file (default: stdout)")

    # --- info ---
    p_info = sub.add_parser("info", help="Show map summary")
    p_info.add_argument("file", help="Path to MindNode .json file")

    args = parser.parse_args(argv)

    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if args.command == "archive":
        return cmd_convert(args, convert_archive)
    elif args.command == "graph":
        rng = random.Random(args.seed)
        return cmd_convert(args, lambda doc: convert_graph(doc, rng=rng))
    elif args.command == "ids":
        return cmd_ids(args)
    elif args.command == "info":
        return cmd_info(args)
    return 2


def cmd_convert(args, convert) -> int:
    input_root = Path(args.input)
    output_root = Path(args.output)
    failures = 0

    for source in find_documents(input_root):
        try:
            converted = convert(read(source))
        except CONVERSION_ERRORS as exc:
            logger.error("Skipping %s: %s", source, exc)
            failures += 1
            continue

        if input_root.is_file() and output_root.suffix:
            dest = output_root
        else:
            dest = output_path(source, input_root, output_root)
        write(converted, dest)
        logger.info("Converted %s -> %s", source, dest)

    return 1 if failures else 0


def cmd_ids(args) -> int:
    try:
        document = parse_ids(read(args.file))
    except CONVERSION_ERRORS as exc:
        logger.error("Cannot rewrite ids in %s: %s", args.file, exc)
        return 1

    text = json.dumps(document_to_dict(document), indent=2, ensure_ascii=False)

    if args.output:
        Path(args.output).write_text(text + "\n", encoding="utf-8")
        logger.info("Wrote %s", args.output)
    else:
        print(text)
    return 0


def cmd_info(args) -> int:
    try:
        document = read(args.file)
        archive = convert_archive(document)
    except CONVERSION_ERRORS as exc:
        logger.error("Cannot summarize %s: %s", args.file, exc)
        return 1

    print(f"File: {args.file}")
    print(f"Title: {document.title}")
    print(f"Nodes: {document.node_count} ({len(document.nodes)} top-level)")
    print(f"Connections: {len(document.connections)}")
    print()

    for node in archive.nodes:
        category = f" [{node.category}]" if node.category else ""
        print(f"• {node.text}{category}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

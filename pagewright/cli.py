"""
Command-line interface for pagewright.

Usage:
    pagewright render notes.json --output notes.pdf
    pagewright render notes.json --format Letter --orientation landscape --no-header
    pagewright info notes.json --json
    pagewright version
"""

import argparse
import json
import sys
from pathlib import Path

from .engine.geometry import Orientation, PageFormat


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="pagewright",
        description="pagewright - paginate content blocks into PDF documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pagewright render notes.json --output notes.pdf
  pagewright render notes.json --format Letter --font-size 12 --margin 25
  pagewright info notes.json
  pagewright version
        """,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Render command
    render_parser = subparsers.add_parser("render", help="Render a JSON block document to PDF")
    render_parser.add_argument("input", help="Input JSON file")
    render_parser.add_argument(
        "-o", "--output",
        help="Output PDF path or directory (default: <title>_<date>.pdf)"
    )
    render_parser.add_argument(
        "--format",
        dest="page_format",
        choices=[fmt.value for fmt in PageFormat],
        default=PageFormat.A4.value,
        help="Page format (default: A4)"
    )
    render_parser.add_argument(
        "--orientation",
        choices=[orientation.value for orientation in Orientation],
        default=Orientation.PORTRAIT.value,
        help="Page orientation (default: portrait)"
    )
    render_parser.add_argument(
        "--font-size",
        type=float,
        default=11.0,
        help="Base font size in points (default: 11)"
    )
    render_parser.add_argument(
        "--line-height",
        type=float,
        default=1.0,
        help="Line height multiplier (default: 1.0)"
    )
    render_parser.add_argument(
        "--margin",
        type=float,
        default=20.0,
        help="Uniform page margin in mm (default: 20)"
    )
    render_parser.add_argument(
        "--no-header",
        action="store_true",
        help="Omit the title/date header"
    )
    render_parser.add_argument(
        "--no-footer",
        action="store_true",
        help="Omit the attribution/page-number footer"
    )
    render_parser.add_argument(
        "--title",
        help="Document title (default: title from the JSON file, else the file name)"
    )

    # Info command
    info_parser = subparsers.add_parser("info", help="Show block statistics for a JSON document")
    info_parser.add_argument("input", help="Input JSON file")
    info_parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON"
    )

    # Version command
    subparsers.add_parser("version", help="Show version information")

    return parser


def cmd_render(args):
    """Handle render command."""
    from .api import export_document
    from .config import ExportOptions
    from .exceptions import PagewrightError
    from .importers import JSONBlockImporter

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    print(f"📄 Opening: {input_path}")
    try:
        importer = JSONBlockImporter(json_path=input_path)
        blocks = importer.to_blocks()
    except (OSError, ValueError) as exc:
        print(f"Error: Could not read blocks: {exc}", file=sys.stderr)
        return 1

    title = args.title or importer.title or input_path.stem
    try:
        options = ExportOptions.from_dict({
            "page_format": args.page_format,
            "orientation": args.orientation,
            "font_size": args.font_size,
            "line_height": args.line_height,
            "margins": args.margin,
            "include_header": not args.no_header,
            "include_footer": not args.no_footer,
        })
        print(f"🖨️  Rendering {len(blocks)} block(s)...")
        result = export_document(blocks, title, options, output=args.output)
    except PagewrightError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"✅ Saved: {result.document}")
    print(f"   Pages: {result.summary.pages}")
    if result.summary.fallbacks:
        print(f"   Fallbacks: {result.summary.fallbacks}")
    return 0


def cmd_info(args):
    """Handle info command."""
    from collections import Counter

    from .importers import JSONBlockImporter

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    try:
        importer = JSONBlockImporter(json_path=input_path)
        blocks = importer.to_blocks()
    except (OSError, ValueError) as exc:
        print(f"Error: Could not read blocks: {exc}", file=sys.stderr)
        return 1

    counts = Counter(type(block).__name__ for block in blocks)
    info = {
        "file": str(input_path),
        "size_bytes": input_path.stat().st_size,
        "title": importer.title,
        "blocks": len(blocks),
        "block_types": dict(sorted(counts.items())),
    }

    if args.json:
        print(json.dumps(info, indent=2, ensure_ascii=False))
    else:
        print(f"📄 File: {input_path}")
        print(f"   Size: {info['size_bytes']:,} bytes")
        if importer.title:
            print(f"   Title: {importer.title}")
        print()
        print("📊 Blocks:")
        for name, count in info["block_types"].items():
            print(f"   {name}: {count}")
        print(f"   total: {len(blocks)}")

    return 0


def cmd_version(args=None):
    """Handle version command."""
    from .version import __version__

    print(f"pagewright v{__version__}")
    print("Pagination and PDF rendering for content block documents")
    return 0


def main(argv=None):
    """Main entry point for CLI."""
    from .utils.logger import setup_logging

    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging("DEBUG" if args.verbose else "WARNING")

    commands = {
        "render": cmd_render,
        "info": cmd_info,
        "version": cmd_version,
    }
    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 1
    return handler(args)


if __name__ == "__main__":
    sys.exit(main())

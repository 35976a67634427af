"""Command-line tool to convert Safedown text to HTML."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List

from safedown.safedown import Safedown
from safedown.safedown_exceptions import SafedownError
from safedown.safedown_link_policy import allow_all_links, allow_schemes
from safedown.safedown_settings import DEFAULT_MAX_NESTING_DEPTH, SafedownSettings


def main(argv: List[str] | None = None) -> int:
    """Main entry point for the Safedown CLI."""
    parser = argparse.ArgumentParser(
        prog='safedown',
        description='Convert restricted markdown to safe HTML',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Convert a file and print to stdout
  safedown comment.txt

  # Convert from stdin
  echo "Safedown is *awesome*." | safedown -

  # Allow http and https links to render as anchors
  safedown comment.txt --allow-scheme http --allow-scheme https
"""
    )
    parser.add_argument(
        'input',
        nargs='?',
        default='-',
        help='Input file (use "-" for stdin, the default)'
    )
    parser.add_argument(
        '-o', '--output',
        help='Output file (default: stdout)'
    )
    parser.add_argument(
        '--allow-links',
        action='store_true',
        help='Render every link as an anchor instead of inert text'
    )
    parser.add_argument(
        '--allow-scheme',
        action='append',
        default=[],
        metavar='SCHEME',
        help='Render links using this scheme as anchors (may be repeated)'
    )
    parser.add_argument(
        '--max-depth',
        type=int,
        default=DEFAULT_MAX_NESTING_DEPTH,
        help=f'Maximum nesting of lists and blockquotes (default: {DEFAULT_MAX_NESTING_DEPTH})'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Log debug information to stderr'
    )
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)

    if args.allow_links and args.allow_scheme:
        print("Error: Cannot use both --allow-links and --allow-scheme", file=sys.stderr)
        return 1

    # Read input
    if args.input == '-':
        source_text = sys.stdin.read()

    else:
        input_path = Path(args.input)
        if not input_path.exists():
            print(f"Error: File not found: {args.input}", file=sys.stderr)
            return 1

        try:
            source_text = input_path.read_text(encoding='utf-8', errors='replace')

        except OSError as e:
            print(f"Error: Cannot read {args.input}: {e}", file=sys.stderr)
            return 1

    link_policy = None
    if args.allow_links:
        link_policy = allow_all_links

    elif args.allow_scheme:
        link_policy = allow_schemes(*args.allow_scheme)

    try:
        renderer = Safedown(SafedownSettings(link_policy=link_policy, max_nesting_depth=args.max_depth))

    except SafedownError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    html_text = renderer.render(source_text)

    if args.output:
        try:
            Path(args.output).write_text(html_text + "\n", encoding='utf-8')

        except OSError as e:
            print(f"Error: Cannot write {args.output}: {e}", file=sys.stderr)
            return 1

    else:
        print(html_text)

    return 0


if __name__ == '__main__':
    sys.exit(main())

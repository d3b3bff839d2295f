"""pairrank CLI - pairwise-comparison ranking.

Each command loads the persisted session for the selected variant, applies
one operation, persists the returned state and renders it.
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path

from . import __version__
from .engine import VARIANT_PROFILES, Variant, create_engine
from .engine.pairs import ComparisonPair
from .output.csv_out import CSVOutput
from .output.json_out import JSONOutput
from .output.terminal import TerminalOutput
from .parser.items import Item, parse_items
from .storage import STATE_DIR_ENV, JSONStateStore, default_state_dir

_VARIANT_NAMES = [v.value for v in Variant]


def read_content(input_arg: str | None) -> str:
    """Read input content from a file path, '-' for stdin, or piped stdin.

    Args:
        input_arg: File path string, '-' for explicit stdin, or None to check
                   for piped stdin automatically.

    Returns:
        File content as a string.
    """
    if input_arg == '-' or (input_arg is None and not sys.stdin.isatty()):
        return sys.stdin.read()

    if input_arg is None:
        raise ValueError("input_arg must be a file path or '-' for stdin")

    path = Path(input_arg)

    max_size = 10 * 1024 * 1024  # 10 MB
    file_size = path.stat().st_size
    if file_size > max_size:
        raise ValueError(f"Input file exceeds {max_size // (1024 * 1024)}MB limit ({file_size // (1024 * 1024)}MB)")

    for encoding in ['utf-8', 'utf-16', 'latin-1']:
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue

    return path.read_bytes().decode('utf-8', errors='replace')


def resolve_choice(pair: ComparisonPair, which: str) -> Item:
    """Map a user answer to a member of ``pair``.

    Accepts ``1``/``2`` or an item name (exact match first, then
    case-insensitive).

    Raises:
        ValueError: If the answer matches neither item
    """
    which = which.strip()
    if which == '1':
        return pair.first
    if which == '2':
        return pair.second

    for item in pair:
        if item.name == which:
            return item
    for item in pair:
        if item.name.lower() == which.lower():
            return item

    raise ValueError(
        f"'{which}' is not one of: 1, 2, {pair.first.name}, {pair.second.name}"
    )


def _show_status(output: TerminalOutput, engine, state) -> None:
    pair = engine.current_pair(state)
    if pair is None:
        output.print_complete()
        output.print_notice("Run 'pairrank rankings' to view or 'pairrank export' to save.")
    else:
        output.print_pair(pair, remaining=engine.remaining(state))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='pairrank',
        description='Rank a list of items by choosing between them two at a time',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pairrank --variant rooms start rooms.txt         # "Name URL" per line
  pairrank --variant inference start items.csv     # "Name,URL" per line
  cat items.csv | pairrank --variant elo start
  pairrank choose 1
  pairrank choose "Kitchen"
  pairrank play
  pairrank rankings
  pairrank export -o ranking.csv
  pairrank reset
        """
    )

    parser.add_argument(
        '--variant',
        choices=_VARIANT_NAMES,
        default=Variant.ROOMS.value,
        help='Ranking variant (default: rooms)'
    )

    parser.add_argument(
        '--state-dir',
        type=Path,
        default=None,
        help=f'Directory for saved sessions (default: ${STATE_DIR_ENV} or {default_state_dir()})'
    )

    parser.add_argument(
        '--seed',
        type=int,
        help='Random seed for the pair order and first Elo pair of a new session (start only)'
    )

    parser.add_argument(
        '--no-color',
        action='store_true',
        help='Disable colored output'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Verbose output'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    sub = parser.add_subparsers(dest='command', metavar='COMMAND')

    start = sub.add_parser('start', help='Start a new session from an item list')
    start.add_argument(
        'input',
        nargs='?',
        help='Input file path, or "-" to read from stdin (omit when piping)'
    )

    sub.add_parser('status', help='Show the current comparison')

    choose = sub.add_parser('choose', help='Pick the preferred item of the current pair')
    choose.add_argument('which', help='1, 2, or the item name')

    sub.add_parser('play', help='Answer comparisons interactively')
    sub.add_parser('rankings', help='Show the ranking')

    export = sub.add_parser('export', help='Write the ranking to a file')
    export.add_argument(
        '-o', '--output',
        help='Output file, or "-" for stdout (default: variant export filename)'
    )
    export.add_argument(
        '-f', '--format',
        choices=['csv', 'json'],
        default='csv',
        help='Output format (default: csv)'
    )
    export.add_argument(
        '--escape',
        action='store_true',
        help='Quote CSV fields that contain commas or quotes'
    )

    sub.add_parser('reset', help='Discard the saved session')

    return parser


def main(args: list[str] | None = None) -> int:
    """Main CLI entry point.

    Args:
        args: Command line arguments (defaults to sys.argv)

    Returns:
        Exit code
    """
    parser = _build_parser()
    parsed_args = parser.parse_args(args)

    if parsed_args.command is None:
        parser.error('a command is required')

    if parsed_args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(levelname)s %(name)s: %(message)s',
            stream=sys.stderr,
        )

    variant = Variant(parsed_args.variant)
    profile = VARIANT_PROFILES[variant]
    # Only a new session is seeded
    rng = None
    if parsed_args.seed is not None and parsed_args.command == 'start':
        rng = random.Random(parsed_args.seed)
    engine = create_engine(variant, rng=rng)
    store = JSONStateStore(parsed_args.state_dir)
    output = TerminalOutput(variant, no_color=parsed_args.no_color)
    command = parsed_args.command

    try:
        if command == 'reset':
            if store.clear(variant):
                output.print_notice("Session cleared.")
            else:
                output.print_notice("No saved session.")
            return 0

        if command == 'start':
            input_arg = parsed_args.input
            if input_arg is None and not sys.stdin.isatty():
                input_arg = '-'
            if input_arg is None:
                print("Error: an input file is required (or pipe data via stdin)", file=sys.stderr)
                return 1
            if input_arg != '-':
                input_path = Path(input_arg)
                if not input_path.exists():
                    print(f"Error: Input file not found: {input_arg}", file=sys.stderr)
                    return 1
                if not input_path.is_file():
                    print(f"Error: Input is not a file: {input_arg}", file=sys.stderr)
                    return 1

            if parsed_args.verbose:
                source = 'stdin' if input_arg == '-' else input_arg
                print(f"Parsing input: {source}", file=sys.stderr)

            items = parse_items(read_content(input_arg), delimiter=profile.delimiter)
            if len(items) < 2:
                print(
                    f"Error: need at least two items, found {len(items)} "
                    f"(expected one 'name{profile.delimiter}url' per line)",
                    file=sys.stderr,
                )
                return 1

            state = engine.start(items, variant)
            path = store.persist(state)
            if parsed_args.verbose:
                print(f"Parsed {len(items)} items; session saved to {path}", file=sys.stderr)

            output.print_header()
            _show_status(output, engine, state)
            return 0

        state = store.load_persisted(variant)
        if state is None:
            print(
                f"Error: No {variant.value} session in progress - run 'pairrank --variant "
                f"{variant.value} start FILE' first",
                file=sys.stderr,
            )
            return 1

        if command == 'status':
            _show_status(output, engine, state)

        elif command == 'choose':
            pair = engine.current_pair(state)
            if pair is None:
                print("Error: All comparisons are complete", file=sys.stderr)
                return 1
            state = engine.choose(state, pair, resolve_choice(pair, parsed_args.which))
            store.persist(state)
            _show_status(output, engine, state)

        elif command == 'play':
            output.print_header()
            while True:
                pair = engine.current_pair(state)
                if pair is None:
                    output.print_complete()
                    output.print_rankings(engine.ranking(state))
                    break

                output.print_pair(pair, remaining=engine.remaining(state))
                try:
                    answer = output.ask_choice()
                except EOFError:
                    break
                if answer == 'q':
                    break

                state = engine.choose(state, pair, resolve_choice(pair, answer))
                try:
                    store.persist(state)
                except OSError as e:
                    print(f"Warning: could not save session ({e}); continuing in memory", file=sys.stderr)

        elif command == 'rankings':
            output.print_rankings(engine.ranking(state))

        elif command == 'export':
            ranked = engine.ranking(state)
            if parsed_args.format == 'json':
                content = JSONOutput(variant).to_json(
                    ranked,
                    complete=engine.is_complete(state),
                    remaining=engine.remaining(state),
                )
            else:
                content = CSVOutput(
                    include_value=profile.value_column,
                    escape=parsed_args.escape,
                ).generate(ranked)

            target = parsed_args.output or profile.export_filename
            if target == '-':
                print(content)
            else:
                Path(target).write_text(content, encoding='utf-8', newline='')
                print(f"Rankings saved to: {target}", file=sys.stderr)

        return 0

    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130
    except (MemoryError, RecursionError):
        raise
    except Exception as e:
        print(f"Error ({type(e).__name__}): {e}", file=sys.stderr)
        if parsed_args.verbose:
            import traceback
            traceback.print_exc()
        else:
            print("Use --verbose for full traceback", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())

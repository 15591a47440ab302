"""visualine — Match the colours of a design document to design tokens.

Usage: visualine <command> [options]

Commands are auto-discovered from visualine/commands/.
Each command module's docstring is its documentation.
Run `visualine help <command>` for full module docs.

Environment variables / .env loading:
  OS environment variables are always used first.
  If a variable is not set, visualine looks for a .env file starting from
  the current directory and walking up, stopping at the nearest .git boundary.
  Use --env-file to override the .env location explicitly.

  VISUALINE_PALETTE    default for --palette
  VISUALINE_VERBOSE    default for --verbose
  VISUALINE_LOG_JSON   default for --log-json
"""

import argparse
import sys

from visualine import registry
from visualine.core.env import Settings, load_env
from visualine.core.errors import VisualineError
from visualine.core.logging import configure_logging


def _build_parser() -> argparse.ArgumentParser:
    commands = registry.discover()

    epilog = (
        'Examples:\n'
        '  visualine scan page.json\n'
        '  visualine scan page.json --selected-only --json\n'
        '  visualine scan page.json --events\n'
        '  visualine scan page.json --palette tokens.json --fail-on-distance 12\n'
        "  visualine match '#FF3366' 3b82f6\n"
        '  visualine palette --json\n'
        '  visualine swatches page.json ./tmp\n'
        '  visualine help scan\n'
    )
    parser = argparse.ArgumentParser(
        prog='visualine',
        description='Match the solid colours of a layer document to design tokens.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    # Global options before the subcommand
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    parser.add_argument('-v', '--verbose', action='store_true', default=None, help='Debug logging to stderr')
    parser.add_argument('--log-json', action='store_true', default=None, help='Log as JSON lines')
    sub = parser.add_subparsers(dest='command', help='Command to run')

    for name, cmd in commands.items():
        p = sub.add_parser(name, help=registry.summary(name))
        p.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')
        p.add_argument(
            '-P',
            '--palette',
            metavar='PATH',
            default=None,
            help='Baseline-data JSON palette (default: VISUALINE_PALETTE or built-in)',
        )
        cmd.configure(p)

    # `help` prints the full module docstring for a command
    help_parser = sub.add_parser('help', help='Print full docs for a command')
    help_parser.add_argument('topic', nargs='?', help='Command name')

    return parser


def _print_help(topic: str | None) -> int:
    """Print full module docstring for a command."""
    commands = registry.discover()

    if topic is None:
        print('Available commands:\n')
        for name in commands:
            print(f'  {name:<10} {registry.summary(name)}')
        print('\nRun: visualine help <command> for full docs.')
        return 0

    if topic not in commands:
        print(f'Unknown command: {topic}', file=sys.stderr)
        print(f'Available: {", ".join(sorted(commands))}', file=sys.stderr)
        return 1

    doc = registry.docs(topic)
    print(doc or f'(No module docs for {topic!r})')
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Load .env before anything else; OS env vars always win
    env_path = load_env(env_file=args.env_file)
    settings = Settings.from_env()
    configure_logging(
        verbose=settings.verbose if args.verbose is None else args.verbose,
        log_json=settings.log_json if args.log_json is None else args.log_json,
    )
    if env_path:
        print(f'visualine: loaded {env_path}', file=sys.stderr)

    if not args.command:
        parser.print_help()
        return 1

    if args.command == 'help':
        return _print_help(args.topic)

    if args.palette is None:
        args.palette = settings.palette_path

    try:
        return registry.get(args.command).execute(args)
    except VisualineError as exc:
        print(f'Error: {exc}', file=sys.stderr)
        return 2


if __name__ == '__main__':
    sys.exit(main())

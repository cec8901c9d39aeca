"""Self-test entry point for ansilog.

Prints the color palette, one line per severity and every serializer
preset so the terminal rendering can be checked by eye:

  ansilog --test-colors
  ansilog --test-stringify
  ansilog --test-colors --no-color --timestamp TIME_MILLIS
"""

import argparse
import sys

from ansilog import colors
from ansilog._version import BASE_VERSION, VERSION
from ansilog.levels import LEVEL_ORDER, LogLevel
from ansilog.logger import AnsiLogger, AnsiLoggerParams, LEVEL_COLORS
from ansilog.stringify import (
    UNDEFINED, color_stringify, debug_stringify, history_stringify,
    mqtt_stringify, payload_stringify,
)
from ansilog.timestamps import TimestampFormat


SAMPLE_PAYLOAD = {
    'number': 1234,
    'string': 'Text',
    'boolean': True,
    'null': None,
    'undefined': UNDEFINED,
    'bigint': 12321412241214141412412,
    'array': [1, '2', True, None, UNDEFINED, print],
    'function': print,
}

PRESETS = (
    ('payload', payload_stringify),
    ('color', color_stringify),
    ('history', history_stringify),
    ('mqtt', mqtt_stringify),
    ('debug', debug_stringify),
)


def _build_parser():
    parser = argparse.ArgumentParser(
        prog="ansilog",
        description="ansilog — colored console and file logging self-test",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"ansilog {BASE_VERSION} ({VERSION})",
    )
    parser.add_argument("--test-colors", action="store_true", default=False,
                        help="Print the 256 color palette and one line per level")
    parser.add_argument("--test-stringify", action="store_true", default=False,
                        help="Print a sample object through every serializer preset")
    parser.add_argument("--no-color", action="store_true", default=False,
                        help="Disable colors in the demo logger")
    parser.add_argument("--timestamp", metavar="FORMAT", default="TIME_MILLIS",
                        choices=[f.name for f in TimestampFormat],
                        help="Timestamp format of the demo logger (default: TIME_MILLIS)")
    parser.add_argument("--name", metavar="NAME", default="TestLogger",
                        help="Name of the demo logger")
    return parser


def show_colors(args, file=None):
    """Print the palette, the level colors and a demo line per severity."""
    file = file if file is not None else sys.stdout
    for i in range(256):
        print(f"{colors.fg256(i)}Foreground color {i:>3} {colors.BRIGHT}bright\x1b[0m", file=file)
    for level in LEVEL_ORDER:
        print(f"{LEVEL_COLORS[level]}{level.value.capitalize()} message{colors.rs}", file=file)

    log = AnsiLogger(
        AnsiLoggerParams(
            log_name=args.name,
            log_level=LogLevel.DEBUG,
            log_with_colors=not args.no_color,
            log_timestamp_format=TimestampFormat[args.timestamp],
        ),
        stream=file,
    )
    for level in LEVEL_ORDER:
        log.log(level, f"{level.value.capitalize()} message")
    log.debug("Debug message with params:", SAMPLE_PAYLOAD, 123, 'Text', True, None)


def show_stringify(file=None):
    """Print SAMPLE_PAYLOAD through every serializer preset."""
    file = file if file is not None else sys.stdout
    for name, preset in PRESETS:
        print(f"{colors.nf}Stringify {name}: {preset(SAMPLE_PAYLOAD)}{colors.rs}", file=file)


def main(argv=None):
    """Main entry point for the ansilog self-test.

    Args:
        argv: Command-line arguments. None means sys.argv[1:].

    Returns:
        Exit code (0 = success).
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not (args.test_colors or args.test_stringify):
        parser.print_help()
        return 0

    try:
        if args.test_colors:
            show_colors(args)
        if args.test_stringify:
            show_stringify()
    except KeyboardInterrupt:
        print("\nInterrupted.")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())

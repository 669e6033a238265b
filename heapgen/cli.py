#!/usr/bin/env python3
"""
Command line front end: heapgen DUMP [-o OUTPUT]

Reads a GC heap log and prints a JavaScript program that recreates the
structure of that heap.
"""

import argparse
import logging
import sys

from .backend.js_emitter import JSEmitter
from .config import EmitterConfig
from .model.errors import HeapGenError
from .pipeline import build_graph


def setup_logger(loglevel):
    FORMAT = '[%(levelname)s] %(message)s'
    logging.basicConfig(format=FORMAT)
    logger = logging.getLogger('heapgen')

    numeric_level = getattr(logging, loglevel.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError('Invalid log level: %s' % loglevel)

    logger.setLevel(numeric_level)

    return logger


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="heapgen",
        description="Generate a JavaScript program that recreates the structure of a GC heap log",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    heapgen gc-log.txt                    # Print the script to stdout
    heapgen gc-log.txt -o heap.js         # Write the script to a file
    heapgen gc-log.txt --stats -l info    # Also log node counts
        """
    )
    parser.add_argument('dump', help="heap log to read")
    parser.add_argument('-o', '--output',
                        help="file to write the script to (default: stdout)")
    parser.add_argument('-l', '--log', default='warning',
                        help="logging level (default=WARNING)")
    parser.add_argument('--no-wrap', action='store_true',
                        help="don't wrap the script in a function")
    parser.add_argument('--stats', action='store_true',
                        help="log node and root counts (implies -l info)")
    return parser


def main(argv=None) -> int:
    """Main entry point for the heapgen command"""
    args = build_arg_parser().parse_args(argv)
    _log = setup_logger(args.log)
    if args.stats and not _log.isEnabledFor(logging.INFO):
        _log.setLevel(logging.INFO)

    try:
        with open(args.dump, encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        sys.stderr.write(f"ERROR: can't read heap log '{args.dump}': {e}\n")
        return 1

    config = EmitterConfig(wrap_in_function=not args.no_wrap)
    try:
        graph = build_graph(text, args.dump)
        script = JSEmitter(config).render(graph)
    except HeapGenError as e:
        sys.stderr.write(str(e))
        return 1

    if args.stats:
        for line in str(graph.stats()).splitlines():
            _log.info(line)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(script)
        _log.info("script written to '%s'", args.output)
    else:
        sys.stdout.write(script)

    return 0


if __name__ == '__main__':
    sys.exit(main())

import argparse
import logging
import sys

from .errors import ScanError
from .sources import FileSource
from .sql import extract_aliases, sql_rules


def _run(fileobj, show_aliases):
    source = FileSource(fileobj)
    try:
        if show_aliases:
            for expression, alias in extract_aliases(source):
                print(f"{alias if alias is not None else '-'}\t{expression}")
        else:
            for token in sql_rules().scan(source):
                print(f"{token.name}:{token.value}")
    except ScanError as e:
        print(f"rscan: error: {e.message}", file=sys.stderr)
        return 1
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(prog="rscan", description="Tokenize a SQL select statement.")
    parser.add_argument("file", nargs="?", help="SQL file to read (default: stdin)")
    parser.add_argument("-a", "--aliases", action="store_true",
                        help="print the select list aliases instead of tokens")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.file is None:
        return _run(sys.stdin, args.aliases)
    with open(args.file, encoding="utf-8") as f:
        return _run(f, args.aliases)


if __name__ == "__main__":
    sys.exit(main())

"""Command line interface: build, verify and search hash index files."""

from __future__ import annotations

import argparse
import enum
import math
import sys
from collections.abc import Sequence
from contextlib import ExitStack
from typing import NoReturn

from .checkidx import check_match, check_sorted
from .createidx import _open_wordlist, create_index
from .filearray import FileArray
from .hashes import get_hasher, hashes_string
from .progressbar import ProgressBar, Segment
from .search import find_matches
from .sortidx import sort_index
from .util import MB, MODE_FULL, MODE_PARTIAL, MatchMode

DEFAULT_RAM = 256

EXIT_SUCCESS = 0
EXIT_GENERIC_FAILURE = 1
EXIT_TEST_FAILURE = EXIT_GENERIC_FAILURE + 1
EXIT_PARSE_FAILURE = EXIT_TEST_FAILURE + 1

USAGE = (
    "Usage:\n"
    "  Display help:\n"
    "    hashlookup -h\n\n"
    "  Create dictionary:\n"
    "    hashlookup -c [-v] [test]... [-r <Size>] [-q] <wordlist> <dictionary> <hashtype>\n\n"
    "  Find hash in dictionary:\n"
    "    hashlookup [-q] <wordlist> <dictionary> <hashtype> <hashes>...\n\n"
    "  Verify dictionary:\n"
    "    hashlookup -v [test]... [-q] [wordlist] <dictionary> [hashtype]\n\n"
    "  List available hashes:\n"
    "    hashlookup -l"
)

_EPILOG = (
    "Match Modes:\n"
    "  ALL:             Go through the entire word list and do full and partial matching. (Default)\n"
    "  ALL_FULL:        Go through the entire word list and only do full matching.\n"
    "  ALL_PARTIAL:     Go through the entire word list and only do partial matching.\n"
    "  RANDOM:          Pick random elements from the word list and do full and partial matching.\n"
    "  RANDOM_FULL:     Pick random elements from the word list and only do full matching.\n"
    "  RANDOM_PARTIAL:  Pick random elements from the word list and only do partial matching.\n\n"
    "Examples:\n"
    "  hashlookup -c words.txt words-sha512.idx sha512\n"
    "  hashlookup words.txt words-md5.idx md5 827CCB0EEA8A706C4C34A16891F84E7B"
)


class _ParseError(Exception):
    """The command line could not be parsed."""


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise _ParseError(message)


class _Mode(enum.Enum):
    USAGE = enum.auto()
    HELP = enum.auto()
    CREATE = enum.auto()
    CREATE_VERIFY = enum.auto()
    VERIFY = enum.auto()
    LIST = enum.auto()
    SEARCH = enum.auto()


def _match_mode(text: str) -> MatchMode:
    try:
        return MatchMode.parse(text)
    except ValueError as error:
        raise argparse.ArgumentTypeError(str(error)) from None


def _ram_size(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        value = -1
    if value < 0:
        raise argparse.ArgumentTypeError(
            "Option 'r' requires a non-negative numeric argument"
        )
    return value


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser; option parsing stops at the first operand."""
    parser = _Parser(
        prog="hashlookup",
        add_help=False,
        allow_abbrev=False,
        usage=argparse.SUPPRESS,
        description=USAGE,
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    modes = parser.add_argument_group("Modes")
    modes.add_argument("-h", "--help", action="store_true", help="Print usage and exit.")
    modes.add_argument(
        "-c", "--create", action="store_true", help="Creates the dictionary from the wordlist."
    )
    modes.add_argument(
        "-v", "--verify", action="store_true", help="Verifies that the dictionary is sorted."
    )
    modes.add_argument(
        "-l",
        "--list",
        action="store_true",
        help="Lists all available hashes separated by a space character.",
    )

    general = parser.add_argument_group("General options")
    general.add_argument(
        "-q", "--quiet", action="store_true", help="Disables most output. Useful for automated scripts."
    )

    create = parser.add_argument_group("Create options")
    create.add_argument(
        "-r",
        "--ram",
        type=_ram_size,
        default=None,
        metavar="SIZE",
        help="How much RAM (SIZE MiB) to use for the cache when sorting the index file.",
    )

    verify = parser.add_argument_group("Verify options")
    verify.add_argument(
        "-a", "--all", action="store_true", help="Enables all tests. Equivalent to: -s -m"
    )
    verify.add_argument(
        "-f",
        "--fast",
        action="store_true",
        help="Enables all fast tests (the default). Equivalent to: -s -m RANDOM_FULL",
    )
    verify.add_argument(
        "-s", "--sorted", action="store_true", help="Checks whether the index file is sorted."
    )
    verify.add_argument(
        "-m",
        "--match",
        nargs="?",
        const=True,
        default=None,
        type=_match_mode,
        metavar="MODE",
        help="Hashes and then finds all or some entries from the wordlist. "
        'Requires "wordlist" and "hashtype" to be specified!',
    )

    parser.add_argument("operands", nargs=argparse.REMAINDER, metavar="ARGS")
    return parser


def _select_mode(args: argparse.Namespace, count: int) -> _Mode:
    if args.help:
        mode = _Mode.HELP
    elif args.create:
        mode = _Mode.CREATE_VERIFY if args.verify else _Mode.CREATE
    elif args.verify:
        mode = _Mode.VERIFY
    elif args.list:
        mode = _Mode.LIST
    else:
        mode = _Mode.SEARCH

    wrong_count = (
        (mode in (_Mode.CREATE, _Mode.CREATE_VERIFY) and count != 3)
        or (mode is _Mode.VERIFY and count not in (1, 3))
        or (mode is _Mode.LIST and count != 0)
        or (mode is _Mode.SEARCH and count <= 3)
    )
    return _Mode.USAGE if wrong_count else mode


def _verify(args: argparse.Namespace, operands: list[str], quiet: bool) -> bool:
    only_index = len(operands) == 1
    wordlist = "" if only_index else operands[0]
    index_file = operands[0] if only_index else operands[1]
    hash_name = "" if only_index else operands[2]

    match_given = args.match is not None
    tests_all = args.all
    tests_fast = args.fast or (not tests_all and not args.sorted and not match_given)
    test_sorted = args.sorted or tests_all or tests_fast
    test_match = (match_given or tests_all or tests_fast) and not only_index

    if isinstance(args.match, MatchMode):
        mode = args.match
    else:
        mode = MatchMode.parse("RANDOM_FULL" if tests_fast else "ALL")

    results: list[tuple[str, bool]] = []
    with FileArray(index_file) as array:
        elements = len(array)
        if quiet:
            bar = ProgressBar()
        else:
            print("\nRunning Tests:", flush=True)
            units = elements if mode.whole_wordlist else math.isqrt(elements)
            match_weight = (units * ((mode & MODE_FULL) + (mode & MODE_PARTIAL)) * 2) << 10
            bar = ProgressBar(
                [
                    Segment("Test: Sorted", elements if test_sorted else 0),
                    Segment("Test: Match", match_weight if test_match else 0),
                ],
                display_sub_progress=True,
            )
        with bar:
            if test_sorted:
                results.append(("Sorted", check_sorted(array, bar, quiet)))
            if test_match:
                results.append(
                    ("Match", check_match(wordlist, array, hash_name, mode, bar, quiet))
                )

    if not quiet:
        print("\nTest Results:\n" + "=" * 41, flush=True)

    for name, passed in results:
        if quiet:
            if not passed:
                print(f"Test: {name}: Failed!")
        else:
            status = "\33[32mOK" if passed else "\33[1;31mFailed!"
            print(f"\tTest: {(name + ':').ljust(20)}{status}\33[0m")
    sys.stdout.flush()
    return all(passed for _, passed in results)


def _search(operands: list[str], quiet: bool) -> None:
    wordlist, index_file, hash_name, *hashes = operands
    with ExitStack() as stack:
        array = stack.enter_context(FileArray(index_file))
        hasher = get_hasher(hash_name)
        source = stack.enter_context(_open_wordlist(wordlist))
        for text in hashes:
            matches = find_matches(source, array, hasher, text)
            if not quiet:
                sys.stdout.write(f"Matches for hash {text}:\n")
            if matches:
                sys.stdout.write("\n".join(map(str, matches)) + ("\n" if quiet else "\n\n"))
            elif not quiet:
                sys.stdout.write("\33[1;30m\tnone\33[0m\n\n")
            sys.stdout.flush()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line tool and return its exit status."""
    parser = build_parser()
    try:
        args, unknown = parser.parse_known_args(
            list(sys.argv[1:] if argv is None else argv)
        )
    except _ParseError as error:
        print(error, file=sys.stderr)
        return EXIT_PARSE_FAILURE

    operands = list(args.operands)
    if operands[:1] == ["--"]:
        operands = operands[1:]

    mode = _select_mode(args, len(operands))
    quiet = args.quiet
    ram = (args.ram if args.ram is not None else DEFAULT_RAM) * MB

    if not quiet:
        for name in unknown:
            print(f"Unknown option: {name}")

    try:
        if mode is _Mode.USAGE:
            print(USAGE, file=sys.stderr)
        elif mode is _Mode.HELP:
            sys.stderr.write(parser.format_help())
        elif mode is _Mode.LIST:
            print(hashes_string())
        elif mode is _Mode.SEARCH:
            _search(operands, quiet)

        if mode in (_Mode.CREATE, _Mode.CREATE_VERIFY):
            wordlist, index_file, hash_name = operands
            create_index(wordlist, index_file, hash_name, quiet)
            sort_index(index_file, ram, quiet)

        if mode in (_Mode.VERIFY, _Mode.CREATE_VERIFY):
            if not _verify(args, operands, quiet):
                return EXIT_TEST_FAILURE
    except (ValueError, OSError) as error:
        print(error, file=sys.stderr)
        return EXIT_GENERIC_FAILURE

    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
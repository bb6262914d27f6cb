"""Runs lambdaeval on a .lc file, or in command-line mode. Also uses error handling context manager. Called from the
lc console script.
"""

import argparse

from lambdaeval.lang.error import ErrorHandler
from lambdaeval.lang.session import Session
from lambdaeval.lang.shell import Shell
from lambdaeval.pure.reducer import NormalOrderReducer


def non_negative(value):
    """argparse type for step bounds."""
    try:
        num = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got '{value}'")
    if num < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got '{value}'")
    return num


def build_parser():
    parser = argparse.ArgumentParser(prog="lc", description="Reduce untyped lambda calculus terms to normal form.")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("-s", "--max-steps", type=non_negative, default=NormalOrderReducer.MAX_STEPS,
                        help="beta steps allowed per expression (default: %(default)s)")
    parser.add_argument("-v", "--verbose", action="store_true", help="print every reduction step")
    parser.add_argument("-i", "--indices", action="store_true", help="print results in de Bruijn notation")
    parser.add_argument("--no-numerals", dest="numerals", action="store_false",
                        help="do not read or show numbers as Church numerals")
    return parser


def main(argv=None):
    """Runs lambdaeval interpreter. Called from lc executable script."""
    args = build_parser().parse_args(argv)

    with ErrorHandler(verbose=args.verbose) as error_handler:
        options = dict(max_steps=args.max_steps, numerals=args.numerals, indices=args.indices)

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False, **options)
            sess.run()

            for result in sess.results:
                print(result)

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, **options)).cmdloop()


if __name__ == "__main__":
    main()

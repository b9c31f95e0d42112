"""
Lox driver: runs source text through every phase and reports problems.

Usage:
    lox [--debug] [script]
    python -m lox_pl [--debug] [script]

Exit codes follow the sysexits convention: 64 for bad usage, 65 when the
program has static errors, 66 when the script is missing, 70 when it fails
at runtime.
"""
##################################
############IMPORTS###############
##################################
import argparse
import sys

from .errors import Runtime_Error, Static_Error
from .interpreter import Interpreter
from .parser import Parser
from .resolver import Resolver
from .scanner import Scanner

EX_USAGE = 64
EX_DATAERR = 65
EX_NOINPUT = 66
EX_SOFTWARE = 70

# Each Lox call costs about a dozen Python frames
RECURSION_LIMIT = 10000
TOO_DEEP = "Program is nested too deeply."
##################################
############CLASSES###############
##################################
class Lox:
    """One execution context: an interpreter plus its error flags.

    Bindings made by one ``run`` are visible to the next run on the same
    object (that is what the REPL relies on), but two ``Lox`` objects never
    share state.
    """

    def __init__(self, out=None, err=None, debug=False):
        self.err = err
        self.debug = debug
        self.interpreter = Interpreter(out)
        self.had_error = False
        self.had_runtimeError = False

    def log(self, msg):
        if self.debug:
            print(f"[lox] {msg}", file=self.err or sys.stderr)

    def run(self, source: str):
        limit = sys.getrecursionlimit()
        sys.setrecursionlimit(max(limit, RECURSION_LIMIT))
        try:
            self._run(source)
        finally:
            sys.setrecursionlimit(limit)

    def _run(self, source):
        self.log("Phase 1: Scanning")
        scanner = Scanner(source)
        tokens = scanner.scan_tokens()
        self.log(f"  {len(tokens) - 1} tokens produced")

        self.log("Phase 2: Parsing")
        parser = Parser(tokens)
        try:
            statements = parser.parse()
        except RecursionError:
            parser.errors.append(Static_Error.at(parser.peek(), TOO_DEEP))
            statements = []
        self.log(f"  {len(statements)} top-level statements")

        for error in scanner.errors + parser.errors:
            self.report(error)
        if self.had_error:
            return

        self.log("Phase 3: Resolving")
        resolver = Resolver(self.interpreter)
        try:
            errors = resolver.resolve(statements)
        except RecursionError:
            errors = resolver.errors + [Static_Error(tokens[-1].line, "", TOO_DEEP)]
        for error in errors:
            self.report(error)
        self.log(f"  {len(self.interpreter.locals)} local references resolved")

        if self.had_error:
            return

        self.log("Phase 4: Interpreting")
        try:
            self.interpreter.interpret(statements)
        except Runtime_Error as error:
            self.runtimeError(error)

    def run_file(self, path: str):
        with open(path, 'r', encoding='utf-8') as file:
            self.run(file.read())
        if self.had_error:
            return EX_DATAERR
        if self.had_runtimeError:
            return EX_SOFTWARE
        return 0

    def run_prompt(self, read_line=input):
        while True:
            try:
                line = read_line("> ")
            except EOFError:
                break
            if line == ":exit":
                break
            self.run(line)
            self.had_error = False
            self.had_runtimeError = False

    def report(self, error):
        print(str(error), file=self.err or sys.stderr)
        self.had_error = True

    def runtimeError(self, error: Runtime_Error):
        print(f"{error.message}\n[line {error.line}]", file=self.err or sys.stderr)
        self.had_runtimeError = True
##################################
############ENTRY POINT###########
##################################
def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="lox",
        description="Tree-walking interpreter for the Lox scripting language",
    )
    parser.add_argument("script", nargs="?", help="Path to a .lox file; omit for a REPL")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Trace each interpreter phase to stderr",
    )

    try:
        args = parser.parse_args(argv)
    except SystemExit as stop:
        if stop.code:
            sys.exit(EX_USAGE)
        raise

    lox = Lox(debug=args.debug)
    if args.script is None:
        if sys.stdin.isatty():
            try:
                import readline  # noqa: F401  line editing and history for input()
            except ImportError:
                pass
        print("| Welcome to Lox!")
        print("| Type ':exit' to quit REPL.")
        lox.run_prompt()
        return

    try:
        status = lox.run_file(args.script)
    except FileNotFoundError:
        print(f"[lox] Error: Input file not found: {args.script!r}", file=sys.stderr)
        sys.exit(EX_NOINPUT)
    if status:
        sys.exit(status)


if __name__ == "__main__":
    main()

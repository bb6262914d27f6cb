"""Session control for lambdaeval. Runs λ-term statements, either from a file or from command-line mode.

Statements are either definitions (`name := λ-term`) or expressions. Definitions are never reduced on their own:
they are inlined into every later expression that uses them, before that expression is reduced.
"""

from lambdaeval.lang.error import DefinitionError, GenericException, ResolutionInvariantViolation
from lambdaeval.lang.parser import Definition, parse_statement
from lambdaeval.lang.printer import display
from lambdaeval.pure.reducer import NormalOrderReducer, StepLimitExceeded
from lambdaeval.pure.resolver import RawAbs, RawApp, free_names, resolve
from lambdaeval.pure.substitution import substitute
from lambdaeval.pure.term import Abstraction, Application


def inline(raw, definitions):
    """Resolves raw with every definition it uses (directly or through other definitions) substituted in.

    definitions is a list of (name, raw λ-term) in order of definition. raw is wrapped so that each used definition
    binds its name around everything defined after it:

    ```
    (λa.(λb.raw) b_term) a_term
    ```

    This is resolved in one pass, then each layer is removed with a substitution. Names are resolved lexically, so a
    definition only sees the definitions made before it, and nothing in a definition can be captured by a binder at
    the place it is used.
    """
    needed = set(free_names(raw))
    layers = []
    for name, term in reversed(definitions):
        if name in needed:
            layers.append((name, term))
            needed.discard(name)
            needed.update(free_names(term))

    for name, term in layers:  # latest definition first, ends up innermost
        raw = RawApp(RawAbs(name, raw), term)

    term = resolve(raw)
    for _ in layers:
        if not isinstance(term, Application) or not isinstance(term.left, Abstraction):
            raise ResolutionInvariantViolation("'{}' lost a definition layer while inlining", str(raw))
        term = substitute(term.left.body, term.right)
    return term


class Session:
    """Governs a lambdaeval session, with control over the scope of definitions."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, cmd_line, max_steps=NormalOrderReducer.MAX_STEPS, numerals=True,
                 indices=False):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path                # used for error messages
        self.cmd_line = cmd_line        # whether or not in command-line mode
        self.max_steps = max_steps      # beta steps allowed per expression
        self.numerals = numerals        # whether or not numbers are Church numerals
        self.indices = indices          # whether or not results are shown in de Bruijn form

        self.definitions = []  # list of (name, raw λ-term), in order of definition
        self.to_exec = {}      # dict of line num: (expr, Expression, number of definitions in scope) to execute
        self.results = []      # displayed results, in order of execution

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            exprs = []
            add_to_prev = False

            try:
                with open(path, "r", encoding="utf-8") as file:
                    for line_num, line in enumerate(file):
                        __, add_to_prev = self.preprocess_line(line, line_num + 1, add_to_prev, exprs)
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

            for expr in exprs:
                self.add(*expr)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line, line_num, add_to_prev, exprs=None):
        """Preprocesses a line from a file or command-line. In command-line mode, exprs can be ignored (used to keep
        track of file's exprs), but add_to_prev will indicate whether a line continuation is necessary. Returns
        updated value of line and add_to_prev. Must be called before calling run.
        """
        if "#" in line:
            line = line[:line.index("#")]  # get rid of comments
        line = line.strip()

        if not line:
            return line, add_to_prev

        if exprs is not None:
            if add_to_prev and exprs:
                prev, prev_num = exprs.pop()
                exprs.append((f"{prev} {line}", prev_num))
            else:
                exprs.append((line, line_num))
            line = exprs[-1][0]

        return line, line.count("(") > line.count(")")

    def add(self, expr, line_num):
        """Adds a statement to the current session. Reduction is lazy and is delayed until run is called."""
        self.error_handler.register_line(self.path, expr, line_num)  # in case error is raised

        stmt = parse_statement(expr, self.numerals)

        if isinstance(stmt, Definition):
            if stmt.name in free_names(stmt.term):
                start = expr.index(":=") + 2
                raise DefinitionError("recursive definitions not supported: '{}'", expr, start=start)
            self.definitions.append((stmt.name, stmt.term))
        else:
            self.to_exec[line_num] = (expr, stmt, len(self.definitions))  # definitions made so far are in scope

        self.error_handler.remove_line(self.path)  # error was not raised

    def show(self, term):
        """Returns term as it should be printed in this session."""
        if self.indices:
            return str(term)
        return display(term, self.numerals)

    def run(self):
        """Runs this session's expressions by inlining definitions and then reducing them. Will raise any errors that
        are encountered.
        """
        for line_num, (expr, stmt, in_scope) in list(self.to_exec.items()):
            self.error_handler.register_line(self.path, expr, line_num)

            try:
                term = inline(stmt.term, self.definitions[:in_scope])
                reducer = NormalOrderReducer(term, self.max_steps)

                for state in reducer.reduction_chain():
                    if reducer.steps and self.error_handler.verbose:
                        self.error_handler.register_step("β", self.show(state))

                result = reducer.result()
                if isinstance(result, StepLimitExceeded):
                    msg = "'{}' did not reach a normal form within {} steps"
                    self.error_handler.warn(msg, (expr, str(result.steps)), diagnosis=False)

                self.results.append(self.show(result.term))
            finally:
                del self.to_exec[line_num]

            self.error_handler.remove_line(self.path)

    def pop(self):
        """Removes and returns the earliest result not yet popped."""
        return self.results.pop(0)

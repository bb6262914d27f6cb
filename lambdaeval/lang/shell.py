"""Interactive mode for lambdaeval, built on cmd. Each statement is run as soon as it is complete."""

import cmd

from lambdaeval.lang.session import Session

HELP = """\
lambdaeval reduces untyped lambda calculus terms to normal form, leftmost-outermost redex first.

  λx.x  or  \\x.x        abstraction (λx y.M is short for λx.λy.M)
  f a b                  application, read as (f a) b
  I := λx.x              definition, used by the statements after it
  3                      Church numeral λf.λx.f (f (f x))
  # ...                  comment

A line with unclosed parentheses continues on the next one. Type 'exit' or Ctrl-D to quit."""


class Shell(cmd.Cmd):
    """Reads statements line by line and prints the normal form of every expression."""
    intro = "Lambda calculus evaluator :: de Bruijn backend\nType 'help' for the syntax."
    main_prompt = "> "
    continuation_prompt = ". "
    prompt = main_prompt

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.pending = ""  # statement so far, while parentheses are unbalanced
        self.line_num = 0

    def default(self, line):
        """Adds line to the pending statement, and runs the statement once it is complete."""
        with self.sess.error_handler:  # cmd.Cmd would stop the loop on an exception
            self.line_num += 1
            stmt, unbalanced = Session.preprocess_line(f"{self.pending} {line}", self.line_num, bool(self.pending))

            if not stmt:
                return

            if unbalanced:
                self.pending = stmt
                self.prompt = self.continuation_prompt
                return

            self.pending = ""
            self.prompt = self.main_prompt

            self.sess.add(stmt, self.line_num)
            self.sess.run()
            while self.sess.results:
                print(self.sess.pop())

    def do_help(self, arg):
        """Prints the syntax summary."""
        print(HELP)

    def emptyline(self):
        """Ignores empty lines instead of repeating the last one."""
        return False

    def do_EOF(self, arg):
        """Quits on Ctrl-D."""
        print()
        return True

    def do_exit(self, arg):
        """Quits the shell."""
        return True

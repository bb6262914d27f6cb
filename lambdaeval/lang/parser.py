"""Recursive-descent parser from tokens to raw (name-based) λ-terms.

```
<statement>   ::= <identifier> ":=" <λ-term>           ; definition, inlined into later statements
                | <λ-term>                             ; expression, reduced when run

<λ-term>      ::= "λ" <identifier>+ "." <λ-term>       ; abstraction: λx y.M is sugar for λx.λy.M
                                                       ; - bodies are greedy: λx.x y = λx.(x y)
              | <application>

<application> ::= <atom>+ [ "λ" ... ]                  ; associating by left: a b c = ((a b) c)
                                                       ; - a trailing abstraction extends to the end

<atom>        ::= <identifier> | <number> | "(" <λ-term> ")"
```

Numbers are Church numerals, expanded while parsing.
"""

from dataclasses import dataclass
from typing import Union

from lambdaeval.lang.error import MalformedSyntaxError
from lambdaeval.lang.lexer import Token, TokenType, tokenize
from lambdaeval.lang.numerical import cnumber
from lambdaeval.pure.resolver import RawAbs, RawApp, RawTerm, RawVar


@dataclass(frozen=True)
class Definition:
    name: str
    term: RawTerm

    def __str__(self):
        return f"{self.name} := {self.term}"


@dataclass(frozen=True)
class Expression:
    term: RawTerm

    def __str__(self):
        return str(self.term)


Statement = Union[Definition, Expression]


class Parser:
    """Parses a single statement from source."""

    def __init__(self, source, numerals=True):
        self.source = source
        self.lines = source.split("\n")
        self.numerals = numerals

        self.tokens = tokenize(source)
        self.current = 0

    def error(self, msg, token=None, *exprs):
        """Returns a MalformedSyntaxError pointing at token (current token by default). The offending line fills the
        first slot of msg, exprs the others.
        """
        if token is None:
            token = self.peek()
        line = self.lines[token.line - 1]
        end = token.column + max(len(token.lexeme), 1)
        return MalformedSyntaxError(msg, (line, *exprs), start=token.column, end=end)

    def peek(self) -> Token:
        return self.tokens[self.current]

    def is_at_end(self):
        return self.peek().type is TokenType.EOF

    def advance(self) -> Token:
        token = self.peek()
        if not self.is_at_end():
            self.current += 1
        return token

    def check(self, token_type):
        return self.peek().type is token_type

    def consume(self, token_type, msg) -> Token:
        if self.check(token_type):
            return self.advance()
        raise self.error(msg)

    def statement(self) -> Statement:
        if self.is_at_end():
            raise MalformedSyntaxError("λ-term cannot be empty", self.source, diagnosis=False)

        if self.check(TokenType.IDENTIFIER) and self.tokens[self.current + 1].type is TokenType.DEFINE:
            name = self.advance().lexeme
            self.advance()
            if self.is_at_end():
                raise self.error("'{}' has no λ-term after ':='")
            result = Definition(name, self.term())
        else:
            result = Expression(self.term())

        if not self.is_at_end():
            raise self.error("'{}' has unexpected '{}'", self.peek(), self.peek().lexeme)
        return result

    def term(self) -> RawTerm:
        if self.check(TokenType.LAMBDA):
            self.advance()

            params = [self.consume(TokenType.IDENTIFIER, "'{}' expects a parameter after 'λ'").lexeme]
            while self.check(TokenType.IDENTIFIER):
                params.append(self.advance().lexeme)

            self.consume(TokenType.DOT, "'{}' expects '.' after function parameter")
            body = self.term()

            for param in reversed(params):
                body = RawAbs(param, body)
            return body

        return self.application()

    def application(self) -> RawTerm:
        left = self.atom()
        if left is None:
            raise self.error("'{}' expects a λ-term")

        while True:
            if self.check(TokenType.LAMBDA):
                return RawApp(left, self.term())

            right = self.atom()
            if right is None:
                return left
            left = RawApp(left, right)

    def atom(self):
        """Returns the next atom, or None if the next token cannot start one."""
        if self.check(TokenType.LEFT_PAREN):
            self.advance()
            term = self.term()
            self.consume(TokenType.RIGHT_PAREN, "'{}' expects closing ')' after λ-term")
            return term

        elif self.check(TokenType.IDENTIFIER):
            return RawVar(self.advance().lexeme)

        elif self.check(TokenType.NUMBER):
            if not self.numerals:
                raise self.error("'{}' contains a number, but numerals are disabled")
            return cnumber(self.advance().lexeme)

        return None


def parse_statement(source: str, numerals=True) -> Statement:
    """Parses source as a definition or an expression."""
    return Parser(source, numerals).statement()


def parse(source: str, numerals=True) -> RawTerm:
    """Parses source as a single λ-term."""
    statement = parse_statement(source, numerals)
    if isinstance(statement, Definition):
        raise MalformedSyntaxError("'{}' is a definition, expected a λ-term", source, diagnosis=False)
    return statement.term

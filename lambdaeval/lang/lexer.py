"""Tokenization of λ-term source text.

```
λ or \\           LAMBDA
.                DOT
( )              LEFT_PAREN, RIGHT_PAREN
:=               DEFINE       ; binds a name to a λ-term
[A-Za-z_][A-Za-z0-9_']*       IDENTIFIER
[0-9]+           NUMBER       ; Church numeral literal
# ...            comment, runs to the end of the line
```
"""

from dataclasses import dataclass
from enum import Enum
from typing import List

from lambdaeval.lang.error import MalformedSyntaxError


class TokenType(Enum):
    LAMBDA = "λ"
    DOT = "."
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"
    DEFINE = ":="
    IDENTIFIER = "identifier"
    NUMBER = "number"
    EOF = "end of input"


@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str
    line: int
    column: int

    def __str__(self):
        return f"{{{self.type.name}, '{self.lexeme}', {self.line}:{self.column}}}"


SINGLE_CHARS = {
    "λ": TokenType.LAMBDA,
    "\\": TokenType.LAMBDA,
    ".": TokenType.DOT,
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
}
WHITESPACE = " \t\r\n"


def is_identifier_start(char):
    return char.isascii() and (char.isalpha() or char == "_")


def is_identifier_char(char):
    return is_identifier_start(char) or char.isdigit() or char == "'"


def tokenize(source: str) -> List[Token]:
    """Returns the tokens of source, terminated by an EOF token. Raises MalformedSyntaxError on unknown characters."""
    tokens = []
    lines = source.split("\n")

    for line_num, line in enumerate(lines, start=1):
        current = 0
        while current < len(line):
            start = current
            char = line[current]
            current += 1

            if char in WHITESPACE:
                continue
            elif char == "#":
                break  # comment

            elif char in SINGLE_CHARS:
                tokens.append(Token(SINGLE_CHARS[char], char, line_num, start))

            elif line.startswith(":=", start):
                current += 1
                tokens.append(Token(TokenType.DEFINE, ":=", line_num, start))

            elif is_identifier_start(char):
                while current < len(line) and is_identifier_char(line[current]):
                    current += 1
                tokens.append(Token(TokenType.IDENTIFIER, line[start:current], line_num, start))

            elif char.isdigit():
                while current < len(line) and line[current].isdigit():
                    current += 1
                if current < len(line) and is_identifier_char(line[current]):
                    raise MalformedSyntaxError("'{}' has an identifier starting with a digit", line,
                                               start=start, end=current + 1)
                tokens.append(Token(TokenType.NUMBER, line[start:current], line_num, start))

            else:
                raise MalformedSyntaxError("'{}' contains invalid character '{}'", (line, char),
                                           start=start, end=start + 1)

    last = lines[-1] if lines else ""
    tokens.append(Token(TokenType.EOF, "", len(lines), len(last)))
    return tokens

"""Lexical analysis for the brace language: turns source text into a lazy stream of tokens.

Tokens are recognized by first match, in this order, at each position:

```
<whitespace> ::= (" " | "\t" | "\r" | "\n")+    ; skipped, newlines only matter for diagnostics
<punct>      ::= "{" | "}" | "(" | ")" | ";" | "+" | "-" | "*" | "/" | "="
<number>     ::= <digit>+                       ; must fit in a 32-bit signed integer
<identifier> ::= (<letter> | "_") (<letter> | <digit> | "_")*
<keyword>    ::= "if" | "then" | "else" | "endif"   ; identifiers that are reserved, case-sensitive
```

Any other character is an InvalidCharacter fault.
"""

import string
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from brace.lang.error import IntegerOverflow, InvalidCharacter

INT_MIN = -2 ** 31
INT_MAX = 2 ** 31 - 1


class Kind(Enum):
    NUMBER = "number"
    IDENTIFIER = "identifier"
    PLUS = "'+'"
    MINUS = "'-'"
    STAR = "'*'"
    SLASH = "'/'"
    ASSIGN = "'='"
    IF = "'if'"
    THEN = "'then'"
    ELSE = "'else'"
    ENDIF = "'endif'"
    LPAREN = "'('"
    RPAREN = "')'"
    LBRACE = "'{'"
    RBRACE = "'}'"
    SEMICOLON = "';'"
    END = "end of input"

    def __str__(self):
        return self.value


PUNCTUATION = {
    "{": Kind.LBRACE,
    "}": Kind.RBRACE,
    "(": Kind.LPAREN,
    ")": Kind.RPAREN,
    ";": Kind.SEMICOLON,
    "+": Kind.PLUS,
    "-": Kind.MINUS,
    "*": Kind.STAR,
    "/": Kind.SLASH,
    "=": Kind.ASSIGN,
}

KEYWORDS = {
    "if": Kind.IF,
    "then": Kind.THEN,
    "else": Kind.ELSE,
    "endif": Kind.ENDIF,
}


@dataclass(frozen=True)
class Token:
    kind: Kind
    text: str
    value: Optional[int] = None  # only set for NUMBER tokens
    line: int = 1
    column: int = 1

    def describe(self):
        """Human-readable form used in parser faults."""
        if self.kind in (Kind.NUMBER, Kind.IDENTIFIER):
            return f"{self.kind} '{self.text}'"
        return str(self.kind)

    def __repr__(self):
        if self.kind in (Kind.NUMBER, Kind.IDENTIFIER):
            return f"{self.kind.name}({self.text})"
        return self.kind.name


class Lexer:
    """Scans text on demand. next_token returns END forever once text is exhausted."""
    WHITESPACE = " \t\r\n"
    DIGITS = string.digits
    IDENT_START = string.ascii_letters + "_"
    IDENT_CHARS = IDENT_START + string.digits

    def __init__(self, text):
        self.text = text
        self.pos = 0
        self.line = 1
        self.column = 1

    @property
    def current_char(self):
        if self.pos >= len(self.text):
            return None
        return self.text[self.pos]

    def advance(self):
        # track line/column based on current_char before moving
        if self.current_char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.pos += 1

    def skip_whitespace(self):
        while self.current_char is not None and self.current_char in Lexer.WHITESPACE:
            self.advance()

    def read_run(self, chars):
        """Consumes the maximal run of chars starting at the current position and returns it."""
        start = self.pos
        while self.current_char is not None and self.current_char in chars:
            self.advance()
        return self.text[start:self.pos]

    def read_number(self):
        start_line, start_col = self.line, self.column
        text = self.read_run(Lexer.DIGITS)

        # length check first: int() refuses very long digit strings
        digits = text.lstrip("0") or "0"
        if len(digits) > len(str(INT_MAX)) or int(digits) > INT_MAX:
            raise IntegerOverflow(text, start_line, start_col)
        return Token(Kind.NUMBER, text, int(digits), start_line, start_col)

    def read_identifier(self):
        start_line, start_col = self.line, self.column
        text = self.read_run(Lexer.IDENT_CHARS)
        return Token(KEYWORDS.get(text, Kind.IDENTIFIER), text, line=start_line, column=start_col)

    def next_token(self):
        """Returns the token starting at the current position and advances past it."""
        self.skip_whitespace()

        char = self.current_char
        if char is None:
            return Token(Kind.END, "", line=self.line, column=self.column)

        if char in PUNCTUATION:
            token = Token(PUNCTUATION[char], char, line=self.line, column=self.column)
            self.advance()
            return token

        if char in Lexer.DIGITS:
            return self.read_number()

        if char in Lexer.IDENT_START:
            return self.read_identifier()

        raise InvalidCharacter(char, self.line, self.column)

    def peek(self):
        """Returns the next token without consuming it."""
        saved = self.pos, self.line, self.column
        try:
            return self.next_token()
        finally:
            self.pos, self.line, self.column = saved

    def tokens(self):
        """Returns every remaining token, END included."""
        return list(self)

    def __iter__(self):
        while True:
            token = self.next_token()
            yield token
            if token.kind is Kind.END:
                return

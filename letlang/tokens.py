"""letlang tokenizer — lexes source into tokens, one per call."""

from __future__ import annotations


# Token type constants
TK_NUMBER = "NUMBER"
TK_IDENT = "IDENT"
TK_PLUS = "+"
TK_STAR = "*"
TK_LPAREN = "("
TK_RPAREN = ")"
TK_EQUALS = "="
TK_LET = "let"
TK_IN = "in"
TK_EOF = "EOF"

KEYWORDS: set[str] = {
    "let",
    "in",
}

SINGLE_OPS: set[str] = {
    "+",
    "*",
    "(",
    ")",
    "=",
}

WHITESPACE: set[str] = {" ", "\t", "\r", "\n"}


class TokenizeError(Exception):
    """Error during tokenization."""

    def __init__(self, msg: str, line: int, col: int):
        self.msg: str = msg
        self.line: int = line
        self.col: int = col
        super().__init__(msg + " at line " + str(line) + " col " + str(col))


class UnknownCharacter(TokenizeError):
    """A character outside the language's alphabet."""

    def __init__(self, char: str, line: int, col: int):
        self.char: str = char
        super().__init__("unknown character: " + repr(char), line, col)


class Token:
    """A token with type, value, and position."""

    def __init__(self, type_: str, value: str, line: int, col: int):
        self.type: str = type_
        self.value: str = value
        self.line: int = line
        self.col: int = col
        self.int_value: int = 0

    def __repr__(self) -> str:
        return (
            "Token("
            + self.type
            + ", "
            + repr(self.value)
            + ", "
            + str(self.line)
            + ", "
            + str(self.col)
            + ")"
        )


def _is_digit(c: str) -> bool:
    return c >= "0" and c <= "9"


def _is_alpha(c: str) -> bool:
    return (c >= "a" and c <= "z") or (c >= "A" and c <= "Z") or c == "_"


def _is_alnum(c: str) -> bool:
    return _is_alpha(c) or _is_digit(c)


class Lexer:
    """Pull-based lexer: each next_token() call scans exactly one token.

    Once the input is exhausted every further call returns a fresh EOF token
    at the end position.
    """

    def __init__(self, source: str):
        self.source: str = source
        self.pos: int = 0
        self.line: int = 1
        self.col: int = 1

    def _skip_whitespace(self) -> None:
        length = len(self.source)
        while self.pos < length and self.source[self.pos] in WHITESPACE:
            if self.source[self.pos] == "\n":
                self.line += 1
                self.col = 1
            else:
                self.col += 1
            self.pos += 1

    def next_token(self) -> Token:
        self._skip_whitespace()
        source = self.source
        length = len(source)
        if self.pos >= length:
            return Token(TK_EOF, "", self.line, self.col)

        c = source[self.pos]
        start_pos = self.pos
        start_line = self.line
        start_col = self.col

        # Number: accumulated digit by digit
        if _is_digit(c):
            value = 0
            while self.pos < length and _is_digit(source[self.pos]):
                value = value * 10 + (ord(source[self.pos]) - ord("0"))
                self.pos += 1
                self.col += 1
            tok = Token(TK_NUMBER, source[start_pos : self.pos], start_line, start_col)
            tok.int_value = value
            return tok

        # Identifier or keyword
        if _is_alpha(c):
            while self.pos < length and _is_alnum(source[self.pos]):
                self.pos += 1
                self.col += 1
            word = source[start_pos : self.pos]
            if word in KEYWORDS:
                return Token(word, word, start_line, start_col)
            return Token(TK_IDENT, word, start_line, start_col)

        # Single-character operators
        if c in SINGLE_OPS:
            self.pos += 1
            self.col += 1
            return Token(c, c, start_line, start_col)

        raise UnknownCharacter(c, start_line, start_col)


def tokenize(source: str) -> list[Token]:
    """Tokenize letlang source into a flat list ending with TK_EOF."""
    lexer = Lexer(source)
    tokens: list[Token] = []
    while True:
        tok = lexer.next_token()
        tokens.append(tok)
        if tok.type == TK_EOF:
            return tokens

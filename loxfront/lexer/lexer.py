"""
Lox Lexer - turns source text into a list of tokens

Single left-to-right pass over the source with one character of lookahead
(two for numbers and block comments). Bad input is reported and skipped,
so a scan always completes and always ends with an EOF token.
"""

import logging
from typing import List, Optional

from .tokens import (
    Token, TokenType, SourceLocation, SINGLE_CHAR_TOKENS, EQUAL_SUFFIXED_TOKENS,
    KEYWORDS, WHITESPACE_CHARS
)
from .errors import (
    LexerError, ErrorReporter, create_unexpected_character_error,
    create_unterminated_string_error
)

log = logging.getLogger(__name__)


class Lexer:
    """
    Lox lexical analyzer.

    Converts source code text into a list of tokens. Lexical errors go to
    the reporter; the offending text is dropped and scanning continues.
    """

    def __init__(self, source: str, filename: str = "<string>",
                 reporter: Optional[ErrorReporter] = None):
        """
        Initialize the lexer with source code.

        Args:
            source: Source code string
            filename: Name of source file for diagnostics
            reporter: Diagnostic sink; a private one is created if omitted
        """
        self.source = source
        self.filename = filename
        self.reporter = reporter if reporter is not None else ErrorReporter(filename)
        self.tokens: List[Token] = []

        # Scan state, reset by tokenize()
        self.start = 0
        self.start_line = 1
        self.start_column = 1
        self.pos = 0
        self.line = 1
        self.column = 1

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source code.

        Returns:
            List of tokens ending with a single EOF token
        """
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens = []
        error_count = 0

        while not self._is_at_end():
            self.start = self.pos
            self.start_line = self.line
            self.start_column = self.column
            try:
                self._scan_token()
            except LexerError as e:
                error_count += 1
                self.reporter.add(e.diagnostic)

        self.tokens.append(Token(TokenType.EOF, "", None, self._current_location()))

        log.debug("Scanned %d tokens from %s (%d lexical errors)",
                  len(self.tokens), self.filename, error_count)
        return self.tokens

    def _scan_token(self):
        """Consume one lexeme starting at self.start and emit at most one token."""
        char = self._advance()

        if char in SINGLE_CHAR_TOKENS:
            self._add_token(SINGLE_CHAR_TOKENS[char])
        elif char in EQUAL_SUFFIXED_TOKENS:
            single, double = EQUAL_SUFFIXED_TOKENS[char]
            self._add_token(double if self._match("=") else single)
        elif char == "/":
            if self._match("/"):
                self._skip_line_comment()
            elif self._match("*"):
                self._skip_block_comment()
            else:
                self._add_token(TokenType.SLASH)
        elif char in WHITESPACE_CHARS or char == "\n":
            pass
        elif char == '"':
            self._string()
        elif _is_digit(char):
            self._number()
        elif _is_alpha(char):
            self._identifier()
        else:
            raise create_unexpected_character_error(char, self._start_location())

    def _skip_line_comment(self):
        # The newline is left for the main loop so the line count stays right
        while self._peek() != "\n" and not self._is_at_end():
            self._advance()

    def _skip_block_comment(self):
        """Skip through the closing */, or silently to end of input."""
        while not self._is_at_end():
            if self._peek() == "*" and self._peek(1) == "/":
                self._advance()
                self._advance()
                return
            self._advance()

    def _string(self):
        """Tokenize a string literal; the value excludes the quotes."""
        while self._peek() != '"' and not self._is_at_end():
            self._advance()

        if self._is_at_end():
            # Reported where input ran out, not at the opening quote
            raise create_unterminated_string_error(self._current_location())

        self._advance()  # Closing quote

        value = self.source[self.start + 1:self.pos - 1]
        self._add_token(TokenType.STRING, value)

    def _number(self):
        """Tokenize a number: digits, optionally '.' followed by more digits."""
        while _is_digit(self._peek()):
            self._advance()

        # A trailing '.' with no digit after it belongs to the next token
        if self._peek() == "." and _is_digit(self._peek(1)):
            self._advance()
            while _is_digit(self._peek()):
                self._advance()

        self._add_token(TokenType.NUMBER, float(self.source[self.start:self.pos]))

    def _identifier(self):
        while _is_alphanumeric(self._peek()):
            self._advance()

        text = self.source[self.start:self.pos]
        self._add_token(KEYWORDS.get(text, TokenType.IDENTIFIER))

    def _add_token(self, token_type: TokenType, literal=None):
        lexeme = self.source[self.start:self.pos]
        self.tokens.append(Token(token_type, lexeme, literal, self._start_location()))

    def _start_location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.start_line, self.start_column, self.start)

    def _current_location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.line, self.column, self.pos)

    def _is_at_end(self) -> bool:
        return self.pos >= len(self.source)

    def _advance(self) -> str:
        """Consume one character, updating line/column."""
        char = self.source[self.pos]
        self.pos += 1
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return char

    def _match(self, expected: str) -> bool:
        """Consume the next character only if it is `expected`."""
        if self._is_at_end() or self.source[self.pos] != expected:
            return False
        self._advance()
        return True

    def _peek(self, offset: int = 0) -> str:
        """Peek at a character ahead without advancing."""
        peek_pos = self.pos + offset
        if peek_pos < len(self.source):
            return self.source[peek_pos]
        return "\0"

    def has_errors(self) -> bool:
        """Check if the reporter has seen any errors."""
        return self.reporter.had_error


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def _is_alpha(char: str) -> bool:
    return ("a" <= char <= "z") or ("A" <= char <= "Z") or char == "_"


def _is_alphanumeric(char: str) -> bool:
    return _is_alpha(char) or _is_digit(char)


def scan(source: str, filename: str = "<string>",
         reporter: Optional[ErrorReporter] = None) -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Never raises for malformed input; check `reporter.had_error` instead.
    """
    return Lexer(source, filename, reporter).tokenize()


def scan_file(filepath: str, reporter: Optional[ErrorReporter] = None) -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Raises:
        OSError: If the file cannot be read
    """
    with open(filepath, "r", encoding="utf-8") as f:
        source = f.read()

    return scan(source, filepath, reporter)

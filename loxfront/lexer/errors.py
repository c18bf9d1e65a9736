"""
Error handling for the Lox lexer.

Provides the shared diagnostic record, the exception the lexer raises
internally for malformed input, and the reporter that accumulates
diagnostics for a single scan/parse run.
"""

import logging
from typing import Optional, List, TextIO
from dataclasses import dataclass

from .tokens import Token, TokenType, SourceLocation

log = logging.getLogger(__name__)


@dataclass
class Diagnostic:
    """A single error or warning produced by the lexer or parser."""
    message: str
    line: int
    severity: str = "error"  # "error", "warning"
    where: str = ""          # " at 'x'", " at end", or empty for lexical errors
    code: Optional[str] = None
    help_text: Optional[str] = None
    location: Optional[SourceLocation] = None
    category: Optional[str] = None  # ERROR_CODES / PARSER_ERROR_CODES title for `code`

    def __str__(self) -> str:
        return f"[line {self.line}] {self.severity.capitalize()}{self.where}: {self.message}"

    def describe(self) -> str:
        """Multi-line rendering with code, location and help text."""
        result = f"{self.severity.upper()}"
        if self.code:
            result += f"[{self.code}]"
        if self.category:
            result += f" {self.category}"
        result += f": {self.message}\n"
        if self.location is not None:
            result += f"  --> {self.location}\n"
        else:
            result += f"  --> line {self.line}\n"
        if self.help_text:
            result += f"  help: {self.help_text}\n"
        return result


def token_diagnostic(token: Token, message: str,
                     code: Optional[str] = None,
                     help_text: Optional[str] = None,
                     category: Optional[str] = None) -> Diagnostic:
    """Build an error diagnostic pointing at a token (or at end of input)."""
    if token.type == TokenType.EOF:
        where = " at end"
    else:
        where = f" at '{token.lexeme}'"
    return Diagnostic(
        message=message,
        line=token.line,
        where=where,
        code=code,
        help_text=help_text,
        location=token.location,
        category=category
    )


class LexerError(Exception):
    """
    Raised inside the lexer for malformed input.

    The lexer catches it, hands the diagnostic to its reporter and keeps
    scanning, so it never escapes `Lexer.tokenize()`.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        code: Optional[str] = None,
        help_text: Optional[str] = None
    ):
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            line=location.line,
            code=code,
            help_text=help_text,
            location=location,
            category=ERROR_CODES.get(code or "")
        )

    def __str__(self) -> str:
        return str(self.diagnostic)


class ErrorReporter:
    """
    Accumulates diagnostics for one front-end run.

    Replaces a process-wide "had error" flag: the caller creates a reporter,
    threads it through the lexer and parser, and inspects `had_error`
    afterwards. If `stream` is given, every diagnostic is also written to it
    as it arrives: one line each, or the multi-line `describe()` form when
    `detailed` is set.
    """

    def __init__(self, filename: str = "<string>", stream: Optional[TextIO] = None,
                 detailed: bool = False):
        self.filename = filename
        self.stream = stream
        self.detailed = detailed
        self.diagnostics: List[Diagnostic] = []

    @property
    def had_error(self) -> bool:
        return any(d.severity == "error" for d in self.diagnostics)

    def report(self, line: int, message: str, where: str = "",
               code: Optional[str] = None) -> Diagnostic:
        """Record an error at a source line."""
        return self.add(Diagnostic(message=message, line=line, where=where, code=code))

    def report_token(self, token: Token, message: str,
                     code: Optional[str] = None,
                     help_text: Optional[str] = None) -> Diagnostic:
        """Record an error located at a token."""
        return self.add(token_diagnostic(token, message, code, help_text))

    def add(self, diagnostic: Diagnostic) -> Diagnostic:
        self.diagnostics.append(diagnostic)
        log.debug("%s: %s", self.filename, diagnostic)
        if self.stream is not None:
            if self.detailed:
                print(diagnostic.describe(), end="", file=self.stream)
            else:
                print(diagnostic, file=self.stream)
        return diagnostic


# Common error codes for categorization
ERROR_CODES = {
    "L001": "Unexpected character",
    "L002": "Unterminated string literal",
}


# Helper functions for creating common errors

def create_unexpected_character_error(char: str, location: SourceLocation) -> LexerError:
    """Create an error for a character no token can start with."""
    if char.isprintable():
        help_text = f"The character '{char}' is not valid in Lox source code."
    else:
        help_text = f"Non-printable character (Unicode: U+{ord(char):04X}) is not allowed."

    return LexerError(
        message="Unexpected character.",
        location=location,
        code="L001",
        help_text=help_text
    )


def create_unterminated_string_error(location: SourceLocation) -> LexerError:
    """Create an error for a string literal that runs off the end of input."""
    return LexerError(
        message="Unterminated string.",
        location=location,
        code="L002",
        help_text='String literals must be closed with a matching " quote.'
    )

"""
Error handling for the Lox parser.

Provides the syntax error exception, the statement-boundary table used for
resynchronization, and factories for the parser's standard errors.
"""

from typing import List, Optional

from ..lexer.tokens import Token, TokenType
from ..lexer.errors import Diagnostic, token_diagnostic


class ParseError(Exception):
    """
    Raised when the parser hits a syntax error.

    Unwinds the current parse; `Parser.parse()` catches it and returns a
    failed result, so it never escapes the front end.
    """

    def __init__(
        self,
        message: str,
        token: Token,
        code: Optional[str] = None,
        help_text: Optional[str] = None
    ):
        super().__init__(message)
        self.token = token
        self.diagnostic: Diagnostic = token_diagnostic(
            token, message, code, help_text, PARSER_ERROR_CODES.get(code or "")
        )

    def __str__(self) -> str:
        return str(self.diagnostic)


class SyntaxErrorRecovery:
    """Recovery helpers for statement-level grammars."""

    # Keywords that begin a new statement
    STATEMENT_KEYWORDS = {
        TokenType.CLASS,
        TokenType.FUN,
        TokenType.VAR,
        TokenType.FOR,
        TokenType.IF,
        TokenType.WHILE,
        TokenType.PRINT,
        TokenType.RETURN,
    }

    @staticmethod
    def synchronize_to_statement_boundary(tokens: List[Token], current_pos: int) -> int:
        """
        Find where the next statement most likely starts.

        Always skips the token at `current_pos` (the one that caused the
        error), then stops just after a ';', just before a statement keyword,
        or at EOF. Returns the position to resume parsing from.
        """
        last = len(tokens) - 1
        if current_pos < last:
            current_pos += 1

        while current_pos < last and tokens[current_pos].type != TokenType.EOF:
            if tokens[current_pos - 1].type == TokenType.SEMICOLON:
                return current_pos
            if tokens[current_pos].type in SyntaxErrorRecovery.STATEMENT_KEYWORDS:
                return current_pos
            current_pos += 1

        return current_pos


# Common parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Expected an expression",
    "P002": "Expected token not found",
    "P003": "Expression nested too deeply",
}


# Helper functions for creating common parser errors

def create_expect_expression_error(found: Token) -> ParseError:
    """Create the error for a token that cannot start an expression."""
    if found.type == TokenType.EOF:
        help_text = "The input ended where an operand was expected."
    else:
        help_text = (f"'{found.lexeme}' cannot start an expression; expected a number, "
                     "string, true, false, nil or '('.")
    return ParseError("Expect expression.", found, code="P001", help_text=help_text)


def create_missing_token_error(expected: TokenType, found: Token, message: str) -> ParseError:
    """Create an error for a required token that is not there."""
    return ParseError(
        message,
        found,
        code="P002",
        help_text=f"The parser expected {expected.name} here but found {found.type.name}."
    )


def create_nesting_too_deep_error(found: Token) -> ParseError:
    """Create an error for input that exhausts the recursion limit."""
    return ParseError(
        "Expression nested too deeply.",
        found,
        code="P003",
        help_text="Reduce the number of nested parentheses or operators."
    )

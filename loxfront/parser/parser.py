"""
Lox Recursive-Descent Parser

One method per grammar production, lowest precedence first:

    sequence       -> conditional ( "," conditional )*
    conditional    -> equality ( "?" sequence ":" conditional )?
    equality       -> comparison ( ( "!=" | "==" ) comparison )*
    comparison     -> addition ( ( ">" | ">=" | "<" | "<=" ) addition )*
    addition       -> multiplication ( ( "-" | "+" ) multiplication )*
    multiplication -> unary ( ( "*" | "/" ) unary )*
    unary          -> ( "!" | "-" ) primary | primary
    primary        -> "false" | "true" | "nil" | NUMBER | STRING
                    | "(" sequence ")"

Binary levels fold to the left; the conditional is right-associative.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from ..lexer.tokens import Token, TokenType, SourceLocation
from ..lexer.errors import Diagnostic, ErrorReporter
from ..lexer.lexer import scan
from .ast_nodes import Expression, Binary, Grouping, Literal, Unary, Conditional
from .errors import (
    ParseError, SyntaxErrorRecovery, create_expect_expression_error,
    create_missing_token_error, create_nesting_too_deep_error
)

log = logging.getLogger(__name__)


@dataclass
class ParseResult:
    """Outcome of one parse: a tree, or no tree plus the diagnostics."""
    expression: Optional[Expression]
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.expression is not None

    def has_errors(self) -> bool:
        """Check if any error was reported during this run."""
        return any(d.severity == "error" for d in self.diagnostics)


class Parser:
    """
    Lox expression parser.

    Parses exactly one expression per `parse()` call. A syntax error is
    reported once, abandons the parse and yields a result without a tree.
    """

    def __init__(self, tokens: List[Token], reporter: Optional[ErrorReporter] = None):
        """
        Initialize parser with a list of tokens.

        Args:
            tokens: Tokens from the lexer, ending with EOF
            reporter: Diagnostic sink; a private one is created if omitted
        """
        self.tokens = tokens
        self.current = 0
        self.reporter = reporter if reporter is not None else ErrorReporter()

    def parse(self) -> ParseResult:
        """
        Parse the token list into a single expression.

        Tokens after a complete expression are left unconsumed.
        """
        self.current = 0
        first_diagnostic = len(self.reporter.diagnostics)

        try:
            expression = self._sequence()
        except ParseError as e:
            log.debug("Parse failed at token %d: %s", self.current, e.diagnostic)
            return ParseResult(None, self.reporter.diagnostics[first_diagnostic:])
        except RecursionError:
            error = self._error(create_nesting_too_deep_error(self._peek()))
            log.debug("Parse failed at token %d: %s", self.current, error.diagnostic)
            return ParseResult(None, self.reporter.diagnostics[first_diagnostic:])

        log.debug("Parsed %s from %d of %d tokens",
                  type(expression).__name__, self.current, len(self.tokens))
        return ParseResult(expression, self.reporter.diagnostics[first_diagnostic:])

    def synchronize(self):
        """
        Skip ahead to the next statement boundary after an error.

        Not used by the expression entry point; kept for statement-level
        grammars built on top of this parser.
        """
        self.current = SyntaxErrorRecovery.synchronize_to_statement_boundary(
            self.tokens, self.current
        )

    # Grammar productions, lowest precedence first

    def _sequence(self) -> Expression:
        return self._left_associative(self._conditional, TokenType.COMMA)

    def _conditional(self) -> Expression:
        expr = self._equality()

        if self._match(TokenType.QUESTION):
            then_branch = self._sequence()
            self._consume(TokenType.COLON,
                          "Expect ':' after then branch of conditional expression.")
            else_branch = self._conditional()
            expr = Conditional(expr, then_branch, else_branch)

        return expr

    def _equality(self) -> Expression:
        return self._left_associative(
            self._comparison, TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL
        )

    def _comparison(self) -> Expression:
        return self._left_associative(
            self._addition,
            TokenType.GREATER, TokenType.GREATER_EQUAL,
            TokenType.LESS, TokenType.LESS_EQUAL
        )

    def _addition(self) -> Expression:
        return self._left_associative(self._multiplication, TokenType.MINUS, TokenType.PLUS)

    def _multiplication(self) -> Expression:
        return self._left_associative(self._unary, TokenType.STAR, TokenType.SLASH)

    def _unary(self) -> Expression:
        if self._match(TokenType.BANG, TokenType.MINUS):
            operator = self._previous()
            right = self._primary()
            return Unary(operator, right)

        return self._primary()

    def _primary(self) -> Expression:
        if self._match(TokenType.FALSE):
            return Literal(False)
        if self._match(TokenType.TRUE):
            return Literal(True)
        if self._match(TokenType.NIL):
            return Literal(None)

        if self._match(TokenType.NUMBER, TokenType.STRING):
            return Literal(self._previous().literal)

        if self._match(TokenType.LEFT_PAREN):
            expr = self._sequence()
            self._consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expr)

        raise self._error(create_expect_expression_error(self._peek()))

    def _left_associative(self, operand: Callable[[], Expression],
                          *operator_types: TokenType) -> Expression:
        """Parse `operand (op operand)*`, folding into left-nested Binary nodes."""
        expr = operand()

        while self._match(*operator_types):
            operator = self._previous()
            right = operand()
            expr = Binary(expr, operator, right)

        return expr

    # Utility methods

    def _match(self, *token_types: TokenType) -> bool:
        """Consume the current token if it has any of the given types."""
        for token_type in token_types:
            if self._check(token_type):
                self._advance()
                return True
        return False

    def _check(self, token_type: TokenType) -> bool:
        """Check if current token matches type without consuming."""
        if self._is_at_end():
            return False
        return self._peek().type == token_type

    def _advance(self) -> Token:
        """Consume and return current token."""
        if not self._is_at_end():
            self.current += 1
        return self._previous()

    def _is_at_end(self) -> bool:
        return self._peek().type == TokenType.EOF

    def _peek(self) -> Token:
        """Return current token without consuming."""
        if self.current < len(self.tokens):
            return self.tokens[self.current]
        # Token list without a trailing EOF; synthesize one after the last token
        location = self.tokens[-1].location if self.tokens else SourceLocation("<string>", 1, 1, 0)
        return Token(TokenType.EOF, "", None, location)

    def _previous(self) -> Token:
        return self.tokens[self.current - 1]

    def _consume(self, token_type: TokenType, message: str) -> Token:
        """Consume token of expected type or report and raise."""
        if self._check(token_type):
            return self._advance()

        raise self._error(create_missing_token_error(token_type, self._peek(), message))

    def _error(self, error: ParseError) -> ParseError:
        """Report a syntax error; the caller decides whether to raise it."""
        self.reporter.add(error.diagnostic)
        return error


def parse(tokens: List[Token], reporter: Optional[ErrorReporter] = None) -> ParseResult:
    """Convenience function to parse a token list."""
    return Parser(tokens, reporter).parse()


def parse_string(source: str, filename: str = "<string>",
                 reporter: Optional[ErrorReporter] = None) -> ParseResult:
    """
    Convenience function to scan and parse a source string.

    The tree is withheld if either stage reported an error.
    """
    if reporter is None:
        reporter = ErrorReporter(filename)
    first_diagnostic = len(reporter.diagnostics)

    tokens = scan(source, filename, reporter)
    result = Parser(tokens, reporter).parse()

    diagnostics = reporter.diagnostics[first_diagnostic:]
    if any(d.severity == "error" for d in diagnostics):
        return ParseResult(None, diagnostics)
    return ParseResult(result.expression, diagnostics)


def parse_file(filepath: str, reporter: Optional[ErrorReporter] = None) -> ParseResult:
    """
    Convenience function to scan and parse a source file.

    Raises:
        OSError: If the file cannot be read
    """
    with open(filepath, "r", encoding="utf-8") as f:
        source = f.read()

    return parse_string(source, filepath, reporter)

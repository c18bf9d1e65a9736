"""
Test suite for the Lox parser.

Tests cover:
- Operator precedence and associativity
- Conditional and comma operators
- Literal round-trips
- Syntax error reporting and all-or-nothing results
- Statement-boundary resynchronization
- AST node contracts
"""

import unittest
import sys
import os
import dataclasses
import tempfile

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from loxfront.lexer.lexer import scan
from loxfront.lexer.tokens import TokenType
from loxfront.lexer.errors import ErrorReporter
from loxfront.parser.parser import Parser, parse, parse_string, parse_file
from loxfront.parser.errors import PARSER_ERROR_CODES
from loxfront.parser.ast_nodes import (
    ASTNodeType, ExpressionVisitor, Binary, Grouping, Literal, Unary, Conditional
)
from loxfront.printer import to_sexpr


class TestParser(unittest.TestCase):
    """Test cases for successful parses."""

    def _parse(self, source: str):
        result = parse_string(source)
        self.assertTrue(result.succeeded, f"Unexpected errors: {result.diagnostics}")
        return result.expression

    def _shape(self, source: str) -> str:
        return to_sexpr(self._parse(source))

    def test_multiplication_binds_tighter_than_addition(self):
        """Test precedence between the arithmetic levels."""
        self.assertEqual(self._shape("1 + 2 * 4"), "(+ 1 (* 2 4))")
        self.assertEqual(self._shape("1 * 2 + 4"), "(+ (* 1 2) 4)")

    def test_grouping_overrides_precedence(self):
        """Test that parentheses produce a Grouping node."""
        expr = self._parse("1 + 2 * (4 - 3)")

        self.assertEqual(to_sexpr(expr), "(+ 1 (* 2 (group (- 4 3))))")
        self.assertIsInstance(expr.right.right, Grouping)

    def test_subtraction_is_left_associative(self):
        """Test that 8 - 4 - 2 groups as (8 - 4) - 2."""
        expr = self._parse("8 - 4 - 2")

        self.assertIsInstance(expr, Binary)
        self.assertIsInstance(expr.left, Binary)
        self.assertEqual(expr.left.left, Literal(8.0))
        self.assertEqual(expr.left.right, Literal(4.0))
        self.assertEqual(expr.right, Literal(2.0))

    def test_every_binary_level_is_left_associative(self):
        """Test left folding at each binary precedence level."""
        cases = {
            "1 / 2 * 3": "(* (/ 1 2) 3)",
            "1 + 2 - 3": "(- (+ 1 2) 3)",
            "1 < 2 >= 3": "(>= (< 1 2) 3)",
            "1 == 2 != 3": "(!= (== 1 2) 3)",
            "1, 2, 3": "(, (, 1 2) 3)",
        }
        for source, shape in cases.items():
            with self.subTest(source=source):
                self.assertEqual(self._shape(source), shape)

    def test_comparison_binds_tighter_than_equality(self):
        """Test the comparison/equality boundary."""
        self.assertEqual(self._shape("1 < 2 == true"), "(== (< 1 2) true)")

    def test_conditional_is_right_associative(self):
        """Test that a ? b : c ? d : e nests in the else branch."""
        expr = self._parse("true ? 1 : false ? 2 : 3")

        self.assertIsInstance(expr, Conditional)
        self.assertEqual(expr.condition, Literal(True))
        self.assertEqual(expr.then_branch, Literal(1.0))
        self.assertIsInstance(expr.else_branch, Conditional)
        self.assertEqual(to_sexpr(expr), "(?: true 1 (?: false 2 3))")

    def test_conditional_then_branch_allows_comma(self):
        """Test that the then branch re-enters at the comma level."""
        expr = self._parse("true ? 1, 2 : 3")

        self.assertEqual(expr.then_branch.operator.type, TokenType.COMMA)
        self.assertEqual(to_sexpr(expr), "(?: true (, 1 2) 3)")

    def test_conditional_binds_looser_than_equality(self):
        """Test that the condition is a full equality expression."""
        self.assertEqual(self._shape("1 == 2 ? 3 : 4"), "(?: (== 1 2) 3 4)")

    def test_comma_has_lowest_precedence(self):
        """Test that 1, 2 + 3 is a single comma node."""
        expr = self._parse("1, 2 + 3")

        self.assertIsInstance(expr, Binary)
        self.assertEqual(expr.operator.type, TokenType.COMMA)
        self.assertEqual(expr.left, Literal(1.0))
        self.assertIsInstance(expr.right, Binary)
        self.assertEqual(expr.right.operator.type, TokenType.PLUS)

    def test_comma_binds_looser_than_conditional(self):
        """Test that a conditional can be one operand of a comma."""
        self.assertEqual(self._shape("true ? 1 : 2, 3"), "(, (?: true 1 2) 3)")

    def test_unary_operators(self):
        """Test negation and logical not."""
        self.assertEqual(self._shape("-1 * 2"), "(* (- 1) 2)")
        self.assertEqual(self._shape("!true"), "(! true)")
        self.assertEqual(self._shape("-(1 + 2)"), "(- (group (+ 1 2)))")

        expr = self._parse("!false")
        self.assertIsInstance(expr, Unary)
        self.assertEqual(expr.operator.type, TokenType.BANG)

    def test_literals(self):
        """Test each literal kind."""
        self.assertIs(self._parse("true").value, True)
        self.assertIs(self._parse("false").value, False)
        self.assertIsNone(self._parse("nil").value)
        self.assertEqual(self._parse("12.5").value, 12.5)
        self.assertEqual(self._parse('"text"').value, "text")

    def test_literal_round_trip(self):
        """Test that scanned literal lexemes re-parse to the same value."""
        for lexeme in ["0", "42", "3.25", '"text"', '""', '"two\nlines"']:
            with self.subTest(lexeme=lexeme):
                token = scan(lexeme)[0]
                expr = self._parse(token.lexeme)
                self.assertIsInstance(expr, Literal)
                self.assertEqual(expr.value, token.literal)

    def test_trailing_tokens_are_left_unconsumed(self):
        """Test that parsing stops after one complete expression."""
        tokens = scan("1 2")
        parser = Parser(tokens)

        result = parser.parse()

        self.assertEqual(result.expression, Literal(1.0))
        self.assertEqual(parser.current, 1)

    def test_cursor_stops_at_eof(self):
        """Test the cursor position after a full parse."""
        tokens = scan("1 + 2")
        parser = Parser(tokens)

        parser.parse()

        self.assertEqual(parser.current, len(tokens) - 1)

    def test_parse_is_repeatable(self):
        """Test that each parse starts from the first token."""
        parser = Parser(scan("(1)"))

        self.assertEqual(parser.parse().expression, parser.parse().expression)

    def test_token_list_without_eof(self):
        """Test that a missing EOF token is treated as end of input."""
        tokens = scan("1 +")[:-1]

        result = parse(tokens)

        self.assertFalse(result.succeeded)
        self.assertEqual(str(result.diagnostics[0]), "[line 1] Error at end: Expect expression.")


class TestParseErrors(unittest.TestCase):
    """Test cases for syntax errors."""

    def _fail(self, source: str):
        result = parse_string(source)
        self.assertFalse(result.succeeded)
        self.assertIsNone(result.expression)
        self.assertTrue(result.has_errors())
        return result.diagnostics

    def test_empty_parentheses(self):
        """Test that () is not a valid grouping."""
        diagnostics = self._fail("()")

        self.assertEqual(len(diagnostics), 1)
        self.assertEqual(diagnostics[0].code, "P001")
        self.assertEqual(str(diagnostics[0]), "[line 1] Error at ')': Expect expression.")

    def test_missing_closing_paren(self):
        """Test an unclosed grouping."""
        diagnostics = self._fail("(1 + 2")

        self.assertEqual(len(diagnostics), 1)
        self.assertEqual(diagnostics[0].code, "P002")
        self.assertEqual(str(diagnostics[0]),
                         "[line 1] Error at end: Expect ')' after expression.")

    def test_missing_colon(self):
        """Test a conditional without an else branch."""
        diagnostics = self._fail("true ? 1")

        self.assertEqual(diagnostics[0].message,
                         "Expect ':' after then branch of conditional expression.")

    def test_missing_operand(self):
        """Test operators without a right operand."""
        for source in ["1 +", "1 *", "1 ==", "1,", "true ? : 2", ""]:
            with self.subTest(source=source):
                diagnostics = self._fail(source)
                self.assertEqual(len(diagnostics), 1)
                self.assertEqual(diagnostics[0].message, "Expect expression.")

    def test_identifiers_are_not_expressions(self):
        """Test that a bare identifier is rejected at primary."""
        diagnostics = self._fail("\n\nname")

        self.assertEqual(str(diagnostics[0]), "[line 3] Error at 'name': Expect expression.")

    def test_unary_operand_must_be_primary(self):
        """Test that unary operators do not chain."""
        diagnostics = self._fail("--1")

        self.assertEqual(str(diagnostics[0]), "[line 1] Error at '-': Expect expression.")

    def test_lexical_error_withholds_tree(self):
        """Test that a scan error fails the whole run even if parsing succeeds."""
        diagnostics = self._fail("1 + @2")

        self.assertEqual(len(diagnostics), 1)
        self.assertEqual(diagnostics[0].code, "L001")

    def test_deep_nesting_is_reported(self):
        """Test that exhausting the recursion limit becomes a diagnostic."""
        depth = sys.getrecursionlimit()
        diagnostics = self._fail("(" * depth + "1" + ")" * depth)

        self.assertEqual(len(diagnostics), 1)
        self.assertEqual(diagnostics[0].code, "P003")

    def test_shared_reporter(self):
        """Test that a caller-provided reporter sees every diagnostic."""
        reporter = ErrorReporter()

        first = parse_string("()", reporter=reporter)
        second = parse_string("1 + 1", reporter=reporter)

        self.assertEqual(len(first.diagnostics), 1)
        self.assertEqual(second.diagnostics, [])
        self.assertTrue(second.succeeded)
        self.assertTrue(reporter.had_error)
        self.assertEqual(len(reporter.diagnostics), 1)

    def test_codes_carry_their_category(self):
        """Test that syntax error codes are looked up in the code table."""
        for source, code in [("()", "P001"), ("(1", "P002"), ("1 ? 2", "P002")]:
            diagnostic = self._fail(source)[0]
            self.assertEqual(diagnostic.code, code)
            self.assertEqual(diagnostic.category, PARSER_ERROR_CODES[code])

    def test_parse_file(self):
        """Test scanning and parsing straight from a file."""
        with tempfile.NamedTemporaryFile("w", suffix=".lox", delete=False,
                                         encoding="utf-8") as f:
            f.write("// sum\n1 + \n(2")
            path = f.name
        try:
            result = parse_file(path)
        finally:
            os.unlink(path)

        self.assertFalse(result.succeeded)
        self.assertEqual(str(result.diagnostics[0]),
                         "[line 3] Error at end: Expect ')' after expression.")
        self.assertEqual(result.diagnostics[0].location.filename, path)


class TestSynchronize(unittest.TestCase):
    """Test cases for statement-boundary recovery."""

    def _synchronize(self, source: str, start: int = 0):
        parser = Parser(scan(source))
        parser.current = start
        parser.synchronize()
        return parser

    def test_stops_after_semicolon(self):
        """Test that recovery resumes after a ';'."""
        parser = self._synchronize("bad tokens ; 1")

        self.assertEqual(parser.current, 3)
        self.assertEqual(parser.tokens[parser.current].type, TokenType.NUMBER)

    def test_stops_before_statement_keyword(self):
        """Test that recovery resumes at a statement keyword."""
        for keyword in ["class", "fun", "var", "for", "if", "while", "print", "return"]:
            with self.subTest(keyword=keyword):
                parser = self._synchronize(f"a b {keyword} c")
                self.assertEqual(parser.current, 2)

    def test_always_skips_current_token(self):
        """Test that the token that caused the error is skipped."""
        parser = self._synchronize("var var")

        self.assertEqual(parser.current, 1)

    def test_runs_to_eof(self):
        """Test recovery with no boundary in sight."""
        parser = self._synchronize("a b c")

        self.assertEqual(parser.tokens[parser.current].type, TokenType.EOF)

    def test_at_eof_stays_put(self):
        """Test that recovery never moves past EOF."""
        parser = self._synchronize("a", start=1)

        self.assertEqual(parser.current, 1)


class TestASTNodes(unittest.TestCase):
    """Test cases for the expression node contracts."""

    def test_nodes_are_immutable(self):
        """Test that nodes cannot be modified after construction."""
        expr = parse_string("1 + 2").expression

        with self.assertRaises(dataclasses.FrozenInstanceError):
            expr.left = Literal(3.0)

    def test_children(self):
        """Test direct child lists in source order."""
        expr = parse_string("true ? -1 : (2)").expression

        self.assertEqual(len(expr.children()), 3)
        self.assertEqual(expr.children()[0], Literal(True))
        self.assertIsInstance(expr.children()[1], Unary)
        self.assertIsInstance(expr.children()[2], Grouping)
        self.assertEqual(expr.children()[2].children(), [Literal(2.0)])
        self.assertEqual(Literal(None).children(), [])

    def test_node_types(self):
        """Test the node type tags."""
        self.assertEqual(Literal(1.0).node_type, ASTNodeType.LITERAL)
        self.assertEqual(Grouping(Literal(1.0)).node_type, ASTNodeType.GROUPING)
        self.assertEqual(parse_string("1 - 1").expression.node_type, ASTNodeType.BINARY)
        self.assertEqual(parse_string("-1").expression.node_type, ASTNodeType.UNARY)
        self.assertEqual(parse_string("1 ? 2 : 3").expression.node_type,
                         ASTNodeType.CONDITIONAL)

    def test_incomplete_visitor_cannot_be_created(self):
        """Test that a visitor must handle all five node types."""

        class BinaryOnly(ExpressionVisitor):
            def visit_binary(self, expr):
                return "binary"

        with self.assertRaises(TypeError):
            BinaryOnly()

    def test_accept_dispatches_once_per_node(self):
        """Test double dispatch over every node type."""

        class Recorder(ExpressionVisitor):
            def __init__(self):
                self.calls = []

            def _record(self, name, expr):
                self.calls.append(name)
                for child in expr.children():
                    child.accept(self)

            def visit_binary(self, expr):
                self._record("binary", expr)

            def visit_grouping(self, expr):
                self._record("grouping", expr)

            def visit_literal(self, expr):
                self._record("literal", expr)

            def visit_unary(self, expr):
                self._record("unary", expr)

            def visit_conditional(self, expr):
                self._record("conditional", expr)

        recorder = Recorder()
        parse_string("true ? -(1) : 2 + 3").expression.accept(recorder)

        self.assertEqual(recorder.calls, [
            "conditional", "literal", "unary", "grouping", "literal",
            "binary", "literal", "literal",
        ])


if __name__ == "__main__":
    unittest.main()

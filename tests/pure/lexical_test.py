import unittest

from brace.lang.error import IntegerOverflow, InvalidCharacter
from brace.pure.lexical import INT_MAX, Kind, Lexer, Token


def kinds(text):
    return [token.kind for token in Lexer(text)]


class LexerTestCase(unittest.TestCase):

    def test_punctuation(self):
        cases = {
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
        for case, expected in cases.items():
            self.assertEqual([expected, Kind.END], kinds(case), case)

    def test_keywords(self):
        cases = {
            "if": Kind.IF,
            "then": Kind.THEN,
            "else": Kind.ELSE,
            "endif": Kind.ENDIF,
            "If": Kind.IDENTIFIER,
            "ifx": Kind.IDENTIFIER,
            "end_if": Kind.IDENTIFIER,
            "_if": Kind.IDENTIFIER,
        }
        for case, expected in cases.items():
            token = Lexer(case).next_token()
            self.assertEqual(expected, token.kind, case)
            self.assertEqual(case, token.text, case)

    def test_numbers(self):
        cases = {"0": 0, "7": 7, "0042": 42, str(INT_MAX): INT_MAX, "0" * 5000: 0, "0" * 5000 + "1": 1,
                 "0" * 5000 + str(INT_MAX): INT_MAX}
        for case, expected in cases.items():
            token = Lexer(case).next_token()
            self.assertEqual(Kind.NUMBER, token.kind, case)
            self.assertEqual(expected, token.value, case)
            self.assertEqual(case, token.text, case)

        should_raise = [str(INT_MAX + 1), "99999999999", "1" * 5000, "0" * 5000 + str(INT_MAX + 1)]
        for case in should_raise:
            self.assertRaises(IntegerOverflow, Lexer(case).next_token)

    def test_maximal_munch(self):
        self.assertEqual([Kind.NUMBER, Kind.IDENTIFIER, Kind.END], kinds("12ab3"))
        self.assertEqual(["12", "ab3", ""], [token.text for token in Lexer("12ab3")])
        self.assertEqual([Kind.IDENTIFIER, Kind.ASSIGN, Kind.NUMBER, Kind.SEMICOLON, Kind.END], kinds("x=1;"))

    def test_program(self):
        expected = [
            Kind.LBRACE,
            Kind.IDENTIFIER, Kind.ASSIGN, Kind.NUMBER, Kind.MINUS, Kind.NUMBER, Kind.SEMICOLON,
            Kind.IF, Kind.LPAREN, Kind.IDENTIFIER, Kind.RPAREN, Kind.IDENTIFIER, Kind.ASSIGN, Kind.NUMBER,
            Kind.RBRACE,
            Kind.END,
        ]
        self.assertEqual(expected, kinds("{\n  x = 10 - 3;\n\tif (x) y = 1\r\n}"))

    def test_invalid_character(self):
        should_raise = ["@", "x = 1 % 2", "x != 1", "é", "x = ²"]
        for case in should_raise:
            lexer = Lexer(case)
            self.assertRaises(InvalidCharacter, lexer.tokens)

        with self.assertRaises(InvalidCharacter) as context:
            Lexer("{\n  x = 1 $ 2;\n}").tokens()
        self.assertEqual("$", context.exception.char)
        self.assertEqual((2, 9), (context.exception.line, context.exception.column))
        self.assertEqual("InvalidCharacter", context.exception.kind)

    def test_positions(self):
        tokens = Lexer("{\n  abc = 12;\n}").tokens()
        positions = [(token.text, token.line, token.column) for token in tokens]
        expected = [("{", 1, 1), ("abc", 2, 3), ("=", 2, 7), ("12", 2, 9), (";", 2, 11), ("}", 3, 1), ("", 3, 2)]
        self.assertEqual(expected, positions)

    def test_end_is_idempotent(self):
        cases = ["", "   \n\t", "x"]
        for case in cases:
            lexer = Lexer(case)
            lexer.tokens()
            for _ in range(5):
                self.assertEqual(Kind.END, lexer.next_token().kind, case)

    def test_peek(self):
        lexer = Lexer("a = 1")
        self.assertEqual(Kind.IDENTIFIER, lexer.peek().kind)
        self.assertEqual(Kind.IDENTIFIER, lexer.peek().kind)
        self.assertEqual("a", lexer.next_token().text)
        self.assertEqual(Kind.ASSIGN, lexer.peek().kind)
        self.assertEqual(Kind.ASSIGN, lexer.next_token().kind)
        self.assertEqual(1, lexer.next_token().value)
        self.assertEqual(Kind.END, lexer.peek().kind)
        self.assertEqual(Kind.END, lexer.next_token().kind)

    def test_peek_restores_position_on_fault(self):
        lexer = Lexer("  @")
        self.assertRaises(InvalidCharacter, lexer.peek)
        self.assertEqual((0, 1, 1), (lexer.pos, lexer.line, lexer.column))

    def test_iteration_is_lazy(self):
        lexer = Lexer("x = 1 @")
        tokens = iter(lexer)
        self.assertEqual(Kind.IDENTIFIER, next(tokens).kind)
        self.assertEqual(Kind.ASSIGN, next(tokens).kind)
        self.assertEqual(Kind.NUMBER, next(tokens).kind)
        self.assertRaises(InvalidCharacter, next, tokens)


class TokenTestCase(unittest.TestCase):

    def test_describe(self):
        cases = {
            Token(Kind.IDENTIFIER, "foo"): "identifier 'foo'",
            Token(Kind.NUMBER, "3", 3): "number '3'",
            Token(Kind.SEMICOLON, ";"): "';'",
            Token(Kind.ENDIF, "endif"): "'endif'",
            Token(Kind.END, ""): "end of input",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, case.describe(), case)

    def test_immutable(self):
        token = Token(Kind.NUMBER, "3", 3)
        with self.assertRaises(AttributeError):
            token.value = 4


if __name__ == '__main__':
    unittest.main()

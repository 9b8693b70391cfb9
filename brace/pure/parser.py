"""Recursive-descent parser for the brace language, with a single token of lookahead.

```
<program>    ::= "{" <statement>* "}"
<statement>  ::= <assignment> | <if> | <block>
<block>      ::= "{" <statement>* "}"
<assignment> ::= IDENT "=" <expr> [";"]
<if>         ::= "if" "(" <expr> ")" <statement>
               | "if" <expr> "then" <statement> ["else" <statement>] "endif"
<expr>       ::= <term> (("+" | "-") <term>)*       ; left-associative
<term>       ::= <factor> (("*" | "/") <factor>)*   ; left-associative, binds tighter than <expr>
<factor>     ::= NUMBER | IDENT | "(" <expr> ")"
```

Both forms of <if> may start with "(": after the parenthesized group the expression is continued if an operator
follows, and "then" decides between the two forms.

Parsing only builds the tree. Variables are resolved when the tree is evaluated, never here.
"""

from contextlib import contextmanager

from brace.lang.error import NestingTooDeep, UnexpectedEndOfInput, UnexpectedToken
from brace.pure.lexical import Kind, Lexer
from brace.pure.syntax import Assignment, BinaryOp, Block, If, Number, Variable


class Parser:
    """Builds an AST from the tokens of lexer. max_depth bounds nesting of parentheses and statements."""
    MAX_DEPTH = 100

    ADDITIVE = {Kind.PLUS: "+", Kind.MINUS: "-"}
    MULTIPLICATIVE = {Kind.STAR: "*", Kind.SLASH: "/"}
    STATEMENT_START = (Kind.IDENTIFIER, Kind.IF, Kind.LBRACE)

    def __init__(self, lexer, max_depth=None):
        self.lexer = lexer
        self.max_depth = Parser.MAX_DEPTH if max_depth is None else max_depth
        self.depth = 0
        self.current = self.lexer.next_token()

    # move to next token, but only if it matches what we expect
    def eat(self, kind):
        token = self.current
        if token.kind is not kind:
            self.error(kind)
        self.current = self.lexer.next_token()
        return token

    def error(self, expected):
        if self.current.kind is Kind.END:
            raise UnexpectedEndOfInput(expected, self.current)
        raise UnexpectedToken(expected, self.current)

    @contextmanager
    def nested(self):
        self.depth += 1
        try:
            if self.depth > self.max_depth:
                raise NestingTooDeep(self.max_depth, self.current.line, self.current.column)
            yield
        finally:
            self.depth -= 1

    # ---------- TOP LEVEL ----------
    def parse(self):
        """Parses a whole program: statements wrapped in braces, then end of input."""
        program = self.block()
        if self.current.kind is not Kind.END:
            self.error(Kind.END)
        return program

    def parse_statements(self):
        """Parses statements up to end of input, without surrounding braces."""
        token = self.current
        statements = self.statements()
        if self.current.kind is not Kind.END:
            self.error("statement")
        return Block(tuple(statements), token.line, token.column)

    def parse_expression(self):
        """Parses a single expression up to end of input."""
        expr = self.expr()
        if self.current.kind is not Kind.END:
            self.error(Kind.END)
        return expr

    def parse_line(self):
        """Parses a line of interactive input, which is either statements or a bare expression."""
        if self.current.kind is Kind.IDENTIFIER and self.lexer.peek().kind is not Kind.ASSIGN:
            return self.parse_expression()
        if self.current.kind in (Kind.NUMBER, Kind.LPAREN):
            return self.parse_expression()
        return self.parse_statements()

    # ---------- STATEMENTS ----------
    def statements(self):
        statements = []
        while self.current.kind in Parser.STATEMENT_START:
            statements.append(self.statement())
        return statements

    def statement(self):
        with self.nested():
            if self.current.kind is Kind.IDENTIFIER:
                return self.assignment()
            if self.current.kind is Kind.IF:
                return self.if_statement()
            if self.current.kind is Kind.LBRACE:
                return self.block()
            self.error("statement")

    def block(self):
        token = self.eat(Kind.LBRACE)
        statements = self.statements()
        self.eat(Kind.RBRACE)
        return Block(tuple(statements), token.line, token.column)

    def assignment(self):
        token = self.eat(Kind.IDENTIFIER)
        self.eat(Kind.ASSIGN)
        expr = self.expr()
        if self.current.kind is Kind.SEMICOLON:
            self.eat(Kind.SEMICOLON)
        return Assignment(token.text, expr, token.line, token.column)

    def if_statement(self):
        token = self.eat(Kind.IF)

        if self.current.kind is Kind.LPAREN:
            group = self.factor()
            condition = self.expr(group)
            if condition is group and self.current.kind is not Kind.THEN:
                return If(condition, self.statement(), None, token.line, token.column)
        else:
            condition = self.expr()

        self.eat(Kind.THEN)
        then = self.statement()

        otherwise = None
        if self.current.kind is Kind.ELSE:
            self.eat(Kind.ELSE)
            otherwise = self.statement()

        self.eat(Kind.ENDIF)
        return If(condition, then, otherwise, token.line, token.column)

    # ---------- EXPRESSIONS ----------
    def expr(self, first=None):
        """first, if given, is an already parsed leading factor."""
        node = self.term(first)
        while self.current.kind in Parser.ADDITIVE:
            token = self.eat(self.current.kind)
            node = BinaryOp(Parser.ADDITIVE[token.kind], node, self.term(), token.line, token.column)
        return node

    def term(self, first=None):
        node = self.factor() if first is None else first
        while self.current.kind in Parser.MULTIPLICATIVE:
            token = self.eat(self.current.kind)
            node = BinaryOp(Parser.MULTIPLICATIVE[token.kind], node, self.factor(), token.line, token.column)
        return node

    def factor(self):
        token = self.current
        if token.kind is Kind.NUMBER:
            self.eat(Kind.NUMBER)
            return Number(token.value, token.line, token.column)
        if token.kind is Kind.IDENTIFIER:
            self.eat(Kind.IDENTIFIER)
            return Variable(token.text, token.line, token.column)
        if token.kind is Kind.LPAREN:
            with self.nested():
                self.eat(Kind.LPAREN)
                expr = self.expr()
                self.eat(Kind.RPAREN)
                return expr
        self.error("expression")


def parse(source, max_depth=None, bare=False):
    """Parses source into a Block. If bare, source is statements without the surrounding braces."""
    parser = Parser(Lexer(source), max_depth)
    if bare:
        return parser.parse_statements()
    return parser.parse()

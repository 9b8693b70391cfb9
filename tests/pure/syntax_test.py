import unittest

from brace.lang.error import GenericException
from brace.pure.evaluator import Environment, Evaluator
from brace.pure.parser import parse
from brace.pure.syntax import Assignment, BinaryOp, Block, If, Number, Variable


class CanonicalFormTestCase(unittest.TestCase):

    def test_str(self):
        cases = {
            Number(3): "3",
            Number(-3): "(0 - 3)",
            Variable("x"): "x",
            BinaryOp("+", Number(1), BinaryOp("*", Variable("x"), Number(2))): "(1 + (x * 2))",
            Assignment("x", Number(1)): "x = 1;",
            If(Variable("x"), Assignment("y", Number(1))): "if (x) y = 1;",
            If(Variable("x"), Assignment("y", Number(1)), Block(())): "if x then y = 1; else { } endif",
            Block(()): "{ }",
            Block((Assignment("x", Number(1)), Assignment("y", Number(2)))): "{ x = 1; y = 2; }",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, str(case), case)

    def test_round_trip(self):
        programs = [
            "{ }",
            "{ x = 10 - 3 - 2; }",
            "{ x = 2 + 3 * 4; y = (x - 1) / 3 * x }",
            "{ x = 0; if (x) y = 1; }",
            "{ x = 5; if (x) { y = 1; z = y * 7 } }",
            "{ a = 3; if a - 3 then b = 1; else b = 2; endif }",
            "{ a = 1; if (a) if a then b = 1 else b = 2 endif c = a }",
            "{ a = 4; if (a) * 2 - 8 then b = 1 else if (a) b = 9 endif }",
            "{ a = 0 - 7; b = a / 2; { c = a * b - (a - b) } }",
        ]
        for case in programs:
            tree = parse(case)
            reparsed = parse(str(tree))
            self.assertEqual(tree, reparsed, case)
            self.assertEqual(str(tree), str(reparsed), case)

            results = []
            for bindings in ({}, {"a": 2}, {"x": -3}):
                outcomes = []
                for node in (tree, reparsed):
                    env = Environment(bindings)
                    try:
                        Evaluator(env).execute(node)
                        outcomes.append(env.snapshot())
                    except GenericException as e:
                        outcomes.append(e.kind)
                results.append(outcomes)
            for first, second in results:
                self.assertEqual(first, second, case)

    def test_positions_ignored_by_equality(self):
        self.assertEqual(Variable("x", 1, 1), Variable("x", 7, 3))
        self.assertEqual(hash(Number(2, 1, 1)), hash(Number(2, 4, 4)))
        self.assertNotEqual(Variable("x"), Variable("y"))
        self.assertNotEqual(Number(1), Variable("1"))


class DisplayTestCase(unittest.TestCase):

    def test_display(self):
        tree = parse("{ x = 1 + y; if (x) { } }")
        expected = (
            "Block(nodes=[\n"
            "    Assignment(name='x', nodes=[\n"
            "        BinaryOp(op='+', nodes=[\n"
            "            Number(value=1),\n"
            "            Variable(name='y')\n"
            "        ])\n"
            "    ]),\n"
            "    If(nodes=[\n"
            "        Variable(name='x'),\n"
            "        Block()\n"
            "    ])\n"
            "])"
        )
        self.assertEqual(expected, tree.display())

    def test_nodes(self):
        node = If(Variable("x"), Assignment("y", Number(1)))
        self.assertEqual((Variable("x"), Assignment("y", Number(1))), node.nodes)
        self.assertEqual((), Number(1).nodes)

    def test_immutable(self):
        node = BinaryOp("+", Number(1), Number(2))
        with self.assertRaises(AttributeError):
            node.left = Number(3)


if __name__ == '__main__':
    unittest.main()

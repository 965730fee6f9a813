"""Parser tests: precedence, desugaring and error recovery."""

import pytest

from mukadex.ast import Assign, BlockStmt, ExpressionStmt, Function, FunctionStmt, VarStmt, WhileStmt
from mukadex.parser import MAX_NESTING, Parser, parse
from mukadex.printer import print_program
from mukadex.scanner import scan
from mukadex.session import Session


def parse_source(source, reporter):
    return parse(scan(source, reporter), reporter)


def render(source, reporter):
    return print_program(parse_source(source, reporter))


@pytest.mark.parametrize(
    "source,expected",
    [
        ("1 + 2 * 3;", "(; (+ 1 (* 2 3)))"),
        ("1 - 2 - 3;", "(; (- (- 1 2) 3))"),
        ("(1 + 2) * 3;", "(; (* (group (+ 1 2)) 3))"),
        ("-a * b;", "(; (* (- a) b))"),
        ("!!true;", "(; (! (! true)))"),
        ("a or b and c;", "(; (or a (and b c)))"),
        ("a == b < c;", "(; (== a (< b c)))"),
        ("1 < 2 == 3 > 4;", "(; (== (< 1 2) (> 3 4)))"),
        ("a = b = 3;", "(; (= a (= b 3)))"),
        ("f(1)(2, x);", "(; (call (call f 1) 2 x))"),
        ('print "hi" + nil;', '(print (+ "hi" nil))'),
    ],
)
def test_precedence_and_associativity(reporter, source, expected):
    assert render(source, reporter) == expected
    assert not reporter.had_error


def test_assignment_builds_assign_node(reporter):
    [stmt] = parse_source("x = 1;", reporter)
    assert isinstance(stmt, ExpressionStmt)
    assert isinstance(stmt.expression, Assign)
    assert stmt.expression.name.lexeme == "x"


def test_for_loop_desugars_to_block_and_while(reporter):
    [stmt] = parse_source("for (var i = 0; i < 3; i = i + 1) print i;", reporter)
    assert isinstance(stmt, BlockStmt)
    init, loop = stmt.statements
    assert isinstance(init, VarStmt)
    assert isinstance(loop, WhileStmt)
    assert print_program([stmt]) == (
        "(block (var i 0) (while (< i 3) (block (print i) (; (= i (+ i 1))))))"
    )


def test_for_loop_without_clauses_loops_on_true(reporter):
    assert render("for (;;) break;", reporter) == "(while true (break))"


def test_for_loop_with_expression_initializer(reporter):
    assert render("for (i = 0; i < 1;) print i;", reporter) == (
        "(block (; (= i 0)) (while (< i 1) (print i)))"
    )


def test_function_declaration_and_literal(reporter):
    stmts = parse_source("fun add(a, b) { return a + b; } var f = fun (x) { print x; };", reporter)
    decl, var = stmts
    assert isinstance(decl, FunctionStmt)
    assert [p.lexeme for p in decl.function.params] == ["a", "b"]
    assert isinstance(var.initializer, Function)
    assert print_program(stmts) == (
        "(fun add (a b) (return (+ a b)))\n(var f (fun (x) (print x)))"
    )


def test_anonymous_function_as_expression_statement(reporter):
    assert render("fun () {};", reporter) == "(; (fun ()))"


def test_if_else_and_while(reporter):
    assert render("if (a) print 1; else { print 2; } while (b) break;", reporter) == (
        "(if a (print 1) (block (print 2)))\n(while b (break))"
    )


def test_nodes_are_immutable(reporter):
    [stmt] = parse_source("var a = 1;", reporter)
    with pytest.raises(AttributeError):
        stmt.name = None


def test_invalid_assignment_target_is_reported_without_dropping_statement(reporter):
    stmts = parse_source("a + b = c; print 1;", reporter)
    assert reporter.errors[0].message == "Invalid assignment target."
    assert reporter.errors[0].where == " at '='"
    assert len(stmts) == 2


def test_error_recovery_skips_to_next_statement(reporter):
    stmts = parse_source("var = 1; print 2; var x 3; print 4;", reporter)
    assert [e.message for e in reporter.errors] == [
        "Expect variable name.",
        "Expect ';' after variable declaration.",
    ]
    assert print_program(stmts) == "(print 2)\n(print 4)"


def test_error_at_end_of_input(reporter):
    stmts = parse_source("print 1", reporter)
    assert stmts == []
    assert reporter.errors[0].where == " at end"
    assert str(reporter.errors[0]) == "[line 1] Error at end: Expect ';' after value."


def test_recovery_inside_block_keeps_the_block(reporter):
    stmts = parse_source("{ print ; print 1; }", reporter)
    assert reporter.had_error
    assert print_program(stmts) == "(block (print 1))"


def test_too_many_arguments_is_reported_but_parses(reporter):
    args = ", ".join(str(i) for i in range(256))
    stmts = parse_source(f"f({args});", reporter)
    assert reporter.errors[0].message == "Can't have more than 255 arguments."
    assert len(stmts) == 1
    assert len(stmts[0].expression.arguments) == 256


def test_too_many_parameters_is_reported(reporter):
    params = ", ".join(f"p{i}" for i in range(256))
    stmts = parse_source(f"fun f({params}) {{}}", reporter)
    assert reporter.errors[0].message == "Can't have more than 255 parameters."
    assert len(stmts[0].function.params) == 256


def test_deep_nesting_within_the_limit_parses(reporter):
    session = Session(reporter=reporter)
    stmts = session.parse("print " + "(" * 100 + "1" + ")" * 100 + ";")
    assert print_program(stmts) == "(print " + "(group " * 100 + "1" + ")" * 101
    stmts = session.parse("{" * 400 + "print 1;" + "}" * 400)
    assert len(stmts) == 1
    assert not reporter.had_error


@pytest.mark.parametrize(
    "source",
    [
        pytest.param("print " + "(" * (MAX_NESTING + 1) + "1" + ")" * (MAX_NESTING + 1) + ";", id="parens"),
        pytest.param("{" * (MAX_NESTING + 1) + "print 1;" + "}" * (MAX_NESTING + 1), id="blocks"),
        pytest.param("print " + "-" * (MAX_NESTING + 1) + "1;", id="unary"),
        pytest.param("print " + " + ".join(["1"] * (MAX_NESTING + 1)) + ";", id="chain"),
        pytest.param("f" + "()" * (MAX_NESTING + 1) + ";", id="calls"),
    ],
)
def test_nesting_past_the_limit_is_reported(reporter, source):
    Session(reporter=reporter).parse(source)
    assert "Too much nesting." in [d.message for d in reporter.errors]


def test_host_stack_exhaustion_is_reported_and_parsing_continues(reporter, monkeypatch):
    def exhausted(self):
        raise RecursionError("maximum recursion depth exceeded")

    monkeypatch.setattr(Parser, "statement", exhausted)
    stmts = parse_source("print 1; print 2;", reporter)
    assert stmts == []
    assert [d.message for d in reporter.errors] == ["Too much nesting.", "Too much nesting."]

"""
Tests for the parse tree to C code generator.
"""

import pytest

from TranslatorComponents.CodeGenerator import (
    StructuralViolationError,
    generate_c_code,
    get_code_generation_reporter,
    walk_assignment,
    walk_block,
    walk_declaration,
    walk_expression,
    walk_function_call,
    walk_if_statement,
    walk_program,
    walk_statement,
    walk_while_loop,
    wrap_translation_unit,
)
from TranslatorComponents.ParseTree import NodeKind, ParseNode
from TranslatorComponents.Types import node_id

from tree_builders import (
    assignment,
    block,
    call,
    condition,
    declaration,
    expr,
    ident,
    if_statement,
    number,
    program,
    raw_expr,
    stmt,
    while_loop,
)


# =============================================================================
# STATEMENT TRANSLATORS
# =============================================================================


@pytest.mark.parametrize("type_name", ["int", "float", "double", "char", "long", "short"])
def test_declaration_emits_type_and_name(type_name):
    assert walk_declaration(declaration(type_name, "count")) == f"{type_name} count;"


def test_declaration_rejects_unknown_type():
    with pytest.raises(StructuralViolationError) as excinfo:
        walk_declaration(declaration("string", "name"))
    assert excinfo.value.kind is NodeKind.TYPE
    assert excinfo.value.text == "string"


def test_assignment_translates_expression():
    assert walk_assignment(assignment("x", expr(number("5")))) == "x = 5;"
    assert walk_assignment(assignment("x", expr(ident("y")))) == "x = y;"


def test_assignment_of_string_echoes_raw_span():
    assert walk_assignment(assignment("msg", raw_expr('"hi"'))) == 'msg = "hi";'


def test_assignment_requires_identifier_first():
    node = ParseNode(NodeKind.ASSIGNMENT, "5 = 5", (number("5"), expr(number("5"))))
    with pytest.raises(StructuralViolationError) as excinfo:
        walk_assignment(node)
    assert excinfo.value.kind is NodeKind.NUMBER
    assert excinfo.value.position == "assignment"


def test_missing_child_is_a_violation():
    node = ParseNode(NodeKind.DECLARATION, "int", (ParseNode(NodeKind.TYPE, "int"),))
    with pytest.raises(StructuralViolationError) as excinfo:
        walk_declaration(node)
    assert excinfo.value.kind is None
    assert "Missing node in declaration" in str(excinfo.value)


# =============================================================================
# EXPRESSIONS AND CALLS
# =============================================================================


@pytest.mark.parametrize("child", [number("42"), number("2.5"), ident("total")])
def test_expression_echoes_number_and_identifier(child):
    assert walk_expression(expr(child)) == child.text


def test_expression_without_children_echoes_text():
    assert walk_expression(raw_expr('"%d\\n"')) == '"%d\\n"'


def test_expression_rejects_other_child_kinds():
    node = ParseNode(NodeKind.EXPRESSION, "int x", (declaration("int", "x"),))
    with pytest.raises(StructuralViolationError) as excinfo:
        walk_expression(node)
    assert excinfo.value.kind is NodeKind.DECLARATION


def test_function_call_joins_parameters():
    node = call("foo", expr(number("1")), expr(ident("x")))
    assert walk_function_call(node) == "foo(1, x);"


def test_function_call_without_parameters():
    assert walk_function_call(call("tick")) == "tick();"


def test_nested_call_keeps_unconditional_terminator():
    inner = expr(call("g", expr(number("1"))))
    assert walk_function_call(call("f", inner)) == "f(g(1););"
    assert walk_assignment(assignment("x", expr(call("f")))) == "x = f();;"


def test_function_call_parameters_must_be_expressions():
    params = ParseNode(NodeKind.PARAMS_LIST, "1", (number("1"),))
    node = ParseNode(NodeKind.FUNCTION_CALL, "f(1)", (ident("f"), params))
    with pytest.raises(StructuralViolationError):
        walk_function_call(node)


# =============================================================================
# CONTROL FLOW
# =============================================================================


def test_if_statement_concatenates_block_statements():
    cond = condition(expr(ident("x")), "<", expr(number("10")))
    body = block(
        stmt(assignment("x", expr(number("1")))),
        stmt(call("puts", raw_expr('"hi"'))),
    )
    assert walk_if_statement(if_statement(cond, body)) == 'if(x < 10){x = 1;puts("hi");}'


def test_while_loop():
    cond = condition(expr(ident("i")), "!=", expr(number("0")))
    body = block(stmt(assignment("i", expr(number("0")))))
    assert walk_while_loop(while_loop(cond, body)) == "while(i != 0){i = 0;}"


def test_nested_control_flow():
    inner = if_statement(
        condition(expr(ident("a")), "==", expr(ident("b"))),
        block(stmt(call("stop"))),
    )
    outer = while_loop(
        condition(expr(ident("a")), ">=", expr(number("0"))),
        block(stmt(inner), stmt(assignment("a", expr(number("1"))))),
    )
    assert walk_while_loop(outer) == "while(a >= 0){if(a == b){stop();}a = 1;}"


def test_empty_block():
    cond = condition(expr(ident("x")), ">", expr(number("0")))
    assert walk_if_statement(if_statement(cond, block())) == "if(x > 0){}"


def test_unknown_comparison_operator_is_rejected():
    cond = condition(expr(ident("x")), "<>", expr(number("0")))
    with pytest.raises(StructuralViolationError) as excinfo:
        walk_if_statement(if_statement(cond, block()))
    assert excinfo.value.kind is NodeKind.COMPARISON_OPERATOR
    assert excinfo.value.text == "<>"


def test_block_rejects_non_statement_children():
    with pytest.raises(StructuralViolationError) as excinfo:
        walk_block(block(declaration("int", "x")))
    assert excinfo.value.position == "block"


# =============================================================================
# DISPATCH AND PROGRAM
# =============================================================================


def test_statement_dispatch_returns_translation_verbatim():
    assert walk_statement(stmt(declaration("int", "x"))) == "int x;"
    assert walk_statement(stmt(expr(number("5")))) == "5"


def test_empty_statement_yields_empty_text():
    assert walk_statement(ParseNode(NodeKind.STATEMENT, ";")) == ""


def test_statement_rejects_unlisted_child():
    node = ParseNode(NodeKind.STATEMENT, "{}", (block(),))
    with pytest.raises(StructuralViolationError) as excinfo:
        walk_statement(node)
    assert excinfo.value.kind is NodeKind.BLOCK
    assert str(excinfo.value) == "Invalid Node in statement: block"


def test_program_emits_one_line_per_statement():
    tree = program(
        stmt(declaration("int", "x")),
        stmt(assignment("x", expr(number("5")))),
    )
    assert walk_program(tree) == "int x;\nx = 5;\n"


def test_program_rejects_stray_node():
    tree = ParseNode(NodeKind.PROGRAM, "", (declaration("int", "x"),))
    with pytest.raises(StructuralViolationError) as excinfo:
        walk_program(tree)
    assert excinfo.value.position == "program"


def test_generate_c_code_wraps_body_in_main():
    tree = program(
        stmt(declaration("int", "x")),
        stmt(assignment("x", expr(number("5")))),
    )
    assert generate_c_code(tree) == (
        "#include <stdio.h>\nint main() {\nint x;\nx = 5;\n\nreturn 0;\n}"
    )


def test_generate_c_code_for_empty_program():
    assert generate_c_code(program()) == wrap_translation_unit("")


def test_generate_c_code_requires_program_root():
    with pytest.raises(StructuralViolationError) as excinfo:
        generate_c_code(stmt(declaration("int", "x")))
    assert str(excinfo.value) == "Invalid Node in Top-Level: statement"


def test_reporter_reproduces_generated_code():
    first = stmt(declaration("int", "x"))
    second = stmt(call("printf", raw_expr('"%d"'), expr(ident("x"))))
    tree = program(first, second)

    reports = list(get_code_generation_reporter(tree))

    assert "".join(report.new_code for report in reports) == generate_c_code(tree)
    assert len(reports) == 4
    assert reports[1].looked_at_tree_node_id == node_id(first)
    assert reports[2].new_code == 'printf("%d", x);\n'
    assert all(report.current_phase_number == "2" for report in reports)


def test_reporter_aborts_on_violation():
    tree = ParseNode(NodeKind.PROGRAM, "", (ident("x"),))
    reporter = get_code_generation_reporter(tree)
    next(reporter)
    with pytest.raises(StructuralViolationError):
        next(reporter)

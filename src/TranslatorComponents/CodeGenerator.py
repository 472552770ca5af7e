from __future__ import annotations

import logging
from collections.abc import Generator

from TranslatorComponents.ParseTree import NodeKind, ParseNode
from TranslatorComponents.ProgressReport import CodeGenerationReport
from TranslatorComponents.Types import node_id

logger = logging.getLogger(__name__)


### Generates C code from a JPP parse tree. ###

PREAMBLE = "#include <stdio.h>\nint main() {\n"
EPILOGUE = "\nreturn 0;\n}"

# JPP type keywords and comparison operators are emitted unchanged, so only
# lexemes that are already valid C are accepted.
TYPE_KEYWORDS = frozenset({"int", "float", "double", "char", "long", "short"})
COMPARISON_OPERATORS = frozenset({"==", "!=", "<", "<=", ">", ">="})


class StructuralViolationError(Exception):
    """Raised when a node's kind is not permitted at its position in the tree.

    Attributes:
        kind (NodeKind | None): Kind of the offending node, None when a required child is missing.
        position (str): Kind of the enclosing construct, e.g. "statement".
        text (str | None): Offending lexeme for type/operator whitelist failures.
    """

    def __init__(self, kind: NodeKind | None, position: str, text: str | None = None):
        self.kind = kind
        self.position = position
        self.text = text
        if kind is None:
            message = f"Missing node in {position}"
        else:
            message = f"Invalid Node in {position}: {kind.value}"
        if text is not None:
            message += f" ({text!r})"
        super().__init__(message)


def generate_c_code(tree: ParseNode) -> str:
    """Translate a `program` tree into a complete C translation unit.

    Args:
        tree (ParseNode): The root node; must be tagged `program`.

    Returns:
        str: The body wrapped in the fixed `main` template.

    Raises:
        StructuralViolationError: On any node outside the contract of its position.
    """
    logger.info("Generating C Code...")
    if tree.kind is not NodeKind.PROGRAM:
        raise StructuralViolationError(tree.kind, "Top-Level")
    return wrap_translation_unit(walk_program(tree))


def wrap_translation_unit(program_code: str) -> str:
    return f"{PREAMBLE}{program_code}{EPILOGUE}"


def get_code_generation_reporter(
    tree: ParseNode,
) -> Generator[CodeGenerationReport, None, None]:
    """Generator function that yields CodeGenerationReport objects during code generation.

    Concatenating every report's `new_code` gives exactly `generate_c_code(tree)`.

    Args:
        tree: The `program` root to generate code from.

    Yields:
        CodeGenerationReport objects, one per top-level statement plus the template parts.
    """
    if tree.kind is not NodeKind.PROGRAM:
        raise StructuralViolationError(tree.kind, "Top-Level")

    yield _report(tree, "Starting code generation: writing include and main().", PREAMBLE)
    for child in tree.children:
        if child.kind is NodeKind.END_OF_INPUT:
            continue
        if child.kind is not NodeKind.STATEMENT:
            raise StructuralViolationError(child.kind, "program")
        yield _report(
            child,
            f"Generating code for statement on line {child.line}...",
            walk_statement(child) + "\n",
        )
    yield _report(tree, "Closing main() with a normal return.", EPILOGUE)


def _report(node: ParseNode, message: str, code: str) -> CodeGenerationReport:
    report = CodeGenerationReport()
    report.action_bar_message = message
    report.looked_at_tree_node_id = node_id(node)
    report.new_code = code
    return report


def walk_program(program: ParseNode) -> str:
    c_code = ""
    for child in program.children:
        match child.kind:
            case NodeKind.STATEMENT:
                c_code += walk_statement(child) + "\n"
            case NodeKind.END_OF_INPUT:
                continue
            case _:
                raise StructuralViolationError(child.kind, "program")
    return c_code


def walk_statement(statement: ParseNode) -> str:
    """Dispatch a `statement` node to the translator of its first child.

    A statement without children yields "".
    """
    for child in statement.children:
        translator = _STATEMENT_TRANSLATORS.get(child.kind)
        if translator is None:
            raise StructuralViolationError(child.kind, "statement")
        return translator(child)
    return ""


def walk_assignment(assignment: ParseNode) -> str:
    identifier, value = _expect_children(
        assignment, NodeKind.IDENTIFIER, NodeKind.EXPRESSION
    )
    logger.debug("Variable name: %s", identifier.text)
    logger.debug("Assigned value: %s", value.text)
    return f"{identifier.text} = {walk_expression(value)};"


def walk_declaration(declaration: ParseNode) -> str:
    var_type, identifier = _expect_children(
        declaration, NodeKind.TYPE, NodeKind.IDENTIFIER
    )
    if var_type.text not in TYPE_KEYWORDS:
        raise StructuralViolationError(var_type.kind, "declaration", var_type.text)
    logger.debug("Variable type: %s", var_type.text)
    logger.debug("Variable name: %s", identifier.text)
    return f"{var_type.text} {identifier.text};"


def walk_if_statement(if_statement: ParseNode) -> str:
    condition, block = _expect_children(
        if_statement, NodeKind.BOOLEAN_EXPRESSION, NodeKind.BLOCK
    )
    return f"if({walk_boolean_expression(condition)}){{{walk_block(block)}}}"


def walk_while_loop(while_loop: ParseNode) -> str:
    condition, block = _expect_children(
        while_loop, NodeKind.BOOLEAN_EXPRESSION, NodeKind.BLOCK
    )
    return f"while({walk_boolean_expression(condition)}){{{walk_block(block)}}}"


def walk_block(block: ParseNode) -> str:
    # Statements already carry their own terminators; nothing is inserted between them.
    code = ""
    for child in block.children:
        if child.kind is not NodeKind.STATEMENT:
            raise StructuralViolationError(child.kind, "block")
        code += walk_statement(child)
    return code


def walk_boolean_expression(boolean_expression: ParseNode) -> str:
    left_side, comparison, right_side = _expect_children(
        boolean_expression,
        NodeKind.EXPRESSION,
        NodeKind.COMPARISON_OPERATOR,
        NodeKind.EXPRESSION,
    )
    return f"{walk_expression(left_side)} {walk_comparison(comparison)} {walk_expression(right_side)}"


def walk_comparison(comparison: ParseNode) -> str:
    if comparison.text not in COMPARISON_OPERATORS:
        raise StructuralViolationError(comparison.kind, "boolean_expression", comparison.text)
    return comparison.text


def walk_expression(expression: ParseNode) -> str:
    """Translate an `expression` node.

    An expression the grammar did not decompose (e.g. a string literal) is
    echoed verbatim. Numbers and identifiers echo their own text.
    """
    if expression.kind is not NodeKind.EXPRESSION:
        raise StructuralViolationError(expression.kind, "expression position")
    if not expression.children:
        logger.debug("No child found, remaining text: %s", expression.text)
        return expression.text

    child = expression.children[0]
    match child.kind:
        case NodeKind.NUMBER | NodeKind.IDENTIFIER:
            return child.text
        case NodeKind.FUNCTION_CALL:
            return walk_function_call(child)
        case _:
            raise StructuralViolationError(child.kind, "expression")


def walk_function_call(function_call: ParseNode) -> str:
    """Translate a call into `name(params);`.

    The terminator is appended unconditionally, also when the call is nested
    inside another expression (`x = f(1);;`). Callers relying on the output
    being valid C must only use calls in statement position.
    """
    function_name, params_list = _expect_children(
        function_call, NodeKind.IDENTIFIER, NodeKind.PARAMS_LIST
    )
    logger.debug("Function name: %s", function_name.text)
    return f"{function_name.text}({walk_params_list(params_list)});"


def walk_params_list(params_list: ParseNode) -> str:
    return ", ".join(walk_expression(param) for param in params_list.children)


def _expect_children(node: ParseNode, *kinds: NodeKind) -> tuple[ParseNode, ...]:
    """Return the leading children of `node`, checking each against `kinds` in order."""
    children = node.children
    for index, kind in enumerate(kinds):
        if index >= len(children):
            raise StructuralViolationError(None, node.kind.value)
        if children[index].kind is not kind:
            raise StructuralViolationError(children[index].kind, node.kind.value)
    return children[: len(kinds)]


_STATEMENT_TRANSLATORS = {
    NodeKind.ASSIGNMENT: walk_assignment,
    NodeKind.DECLARATION: walk_declaration,
    NodeKind.EXPRESSION: walk_expression,
    NodeKind.FUNCTION_CALL: walk_function_call,
    NodeKind.IF_STATEMENT: walk_if_statement,
    NodeKind.WHILE_LOOP: walk_while_loop,
}

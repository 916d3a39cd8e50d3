"""Canonical, comparable keys for row-filter predicates.

The core never evaluates a filter; it only needs to know whether two items
carry the same one. Expression strings are canonicalized through the Python
parser so ``"wave==1"`` and ``"wave == 1"`` compare equal, and a leading
``~`` (formula style) is accepted and ignored. Filter functions and lambdas
are keyed by their parsed source plus any captured values, so two lambdas
written the same way match across runs.
"""

from __future__ import annotations

import ast
import inspect
import json
import re
import textwrap
import tokenize
from types import CodeType, FunctionType
from typing import Any, Mapping, Optional

NO_FILTER = ""

_EXPR_PREFIX = "expr:"
_MAPPING_PREFIX = "eq:"
_CALLABLE_PREFIX = "callable:"
_OBJECT_PREFIX = "object:"

_LAMBDA_RE = re.compile(r"\blambda\b")
# characters that can follow the end of a lambda embedded in a larger line
_EXPRESSION_ENDS = frozenset(",)]};\n")


def filter_signature(predicate: Any) -> str:
    """Return the signature of ``predicate``; ``NO_FILTER`` when absent."""
    if predicate is None:
        return NO_FILTER
    if isinstance(predicate, str):
        return _EXPR_PREFIX + canonical_expression(predicate)
    if isinstance(predicate, Mapping):
        return _MAPPING_PREFIX + json.dumps(
            {str(key): value for key, value in predicate.items()},
            sort_keys=True,
            default=str,
        )
    if callable(predicate):
        return _CALLABLE_PREFIX + callable_source(predicate)
    return f"{_OBJECT_PREFIX}{_qualified_name(type(predicate))}:{_stable_repr(predicate)}"


def canonical_expression(expression: str) -> str:
    """Normalize a filter expression's spelling without changing its meaning."""
    text = expression.strip()
    if text.startswith("~"):
        text = text[1:].strip()
    try:
        tree = ast.parse(text, mode="eval")
    except (SyntaxError, ValueError):
        return " ".join(text.split())
    return ast.unparse(tree)


def callable_source(predicate: Any) -> str:
    """Canonical text of a filter function or lambda.

    Uses the unparsed source when it can be recovered, followed by the
    values the function closes over. Falls back to the qualified name.
    """
    if not isinstance(predicate, FunctionType):
        return _qualified_name(predicate)
    try:
        source = textwrap.dedent(inspect.getsource(predicate))
    except (OSError, TypeError, SyntaxError, tokenize.TokenError):
        return _qualified_name(predicate)

    if predicate.__name__ == "<lambda>":
        text = _lambda_source(source, predicate.__code__)
    else:
        text = _function_source(source)
    if text is None:
        return _qualified_name(predicate)
    captured = _captured_values(predicate)
    return f"{text} | {captured}" if captured else text


def is_filtered(signature: str) -> bool:
    return signature != NO_FILTER


def describe_signature(signature: str) -> str:
    """Human-readable form of a signature for warnings and CLI output."""
    if not is_filtered(signature):
        return "(no filter)"
    for prefix in (_EXPR_PREFIX, _MAPPING_PREFIX, _CALLABLE_PREFIX):
        if signature.startswith(prefix):
            return signature[len(prefix):]
    return signature


def _lambda_source(source: str, code: CodeType) -> Optional[str]:
    candidates = []
    for match in _LAMBDA_RE.finditer(source):
        node = _longest_lambda(source[match.start():])
        if node is not None:
            candidates.append(node)
    if len(candidates) > 1:
        candidates = [node for node in candidates if _compiles_to(node, code)]
    texts = {ast.unparse(node) for node in candidates}
    if len(texts) != 1:
        return None
    return texts.pop()


def _longest_lambda(text: str) -> Optional[ast.Lambda]:
    ends = [index for index, char in enumerate(text) if char in _EXPRESSION_ENDS]
    ends.append(len(text))
    for end in reversed(ends):
        try:
            tree = ast.parse(text[:end].strip(), mode="eval")
        except SyntaxError:
            continue
        if isinstance(tree.body, ast.Lambda):
            return tree.body
    return None


def _compiles_to(node: ast.Lambda, code: CodeType) -> bool:
    try:
        compiled = compile(ast.Expression(body=node), "<filter>", "eval")
    except (SyntaxError, ValueError):
        return False
    return any(
        isinstance(const, CodeType)
        and const.co_code == code.co_code
        and const.co_names == code.co_names
        and const.co_consts == code.co_consts
        for const in compiled.co_consts
    )


def _function_source(source: str) -> Optional[str]:
    try:
        tree = ast.parse(source)
    except SyntaxError:
        return None
    for node in tree.body:
        if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)):
            body = "; ".join(ast.unparse(statement) for statement in node.body)
            return f"def ({ast.unparse(node.args)}): {body}"
    return None


def _captured_values(function: FunctionType) -> str:
    values = []
    for name, cell in zip(function.__code__.co_freevars, function.__closure__ or ()):
        try:
            contents = cell.cell_contents
        except ValueError:
            continue
        values.append(f"{name}={_stable_repr(contents)}")
    for position, default in enumerate(function.__defaults__ or ()):
        values.append(f"default{position}={_stable_repr(default)}")
    return ", ".join(values)


def _stable_repr(value: Any) -> str:
    if callable(value):
        return _qualified_name(value)
    if type(value).__repr__ is object.__repr__:
        return _qualified_name(type(value))
    return repr(value)


def _qualified_name(target: Any) -> str:
    module = getattr(target, "__module__", None) or type(target).__module__
    name = getattr(target, "__qualname__", None) or type(target).__qualname__
    code = getattr(target, "__code__", None)
    if isinstance(code, CodeType):
        return f"{module}.{name}:{code.co_firstlineno}"
    return f"{module}.{name}"

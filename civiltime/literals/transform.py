"""Check or expand literal calls in Python source with LibCST.

A literal call is a call to one of the helpers in the marker module
(``civiltime.macros`` unless configured otherwise) with a single string
constant argument:

    from civiltime import macros
    EPOCH = macros.date("1970-01-01")

Checking validates every such literal and reports each failure with its
position. Expanding additionally rewrites each valid call into the
equivalent constructor expression, adding an import of the runtime module
when the file does not have one:

    import civiltime
    EPOCH = civiltime.Date(1970, 1, 1)

Every other part of the file is preserved byte for byte.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from fnmatch import fnmatch
from pathlib import Path

import libcst as cst
from libcst.metadata import MetadataWrapper, PositionProvider

from civiltime.literals.expand import DEFAULT_RUNTIME_MODULE, render
from civiltime.literals.grammar import PARSERS, LiteralError, parse_literal

logger = logging.getLogger(__name__)

DEFAULT_MARKER_MODULE = "civiltime.macros"


@dataclass
class Diagnostic:
    """An invalid literal found in a source file.

    ``line`` and ``column`` are 1-indexed and point at the start of the
    call.
    """

    path: str
    line: int
    column: int
    literal: str
    component: str
    message: str

    def __str__(self) -> str:
        return (
            f"{self.path}:{self.line}:{self.column}: "
            f"invalid {self.component} in literal {self.literal!r}: {self.message}"
        )


@dataclass
class TransformResult:
    """Outcome of processing one source file."""

    path: str
    source: str
    code: str
    diagnostics: list[Diagnostic] = field(default_factory=list)
    expanded: int = 0

    @property
    def changed(self) -> bool:
        return self.code != self.source


def _dotted_name(node: cst.BaseExpression) -> str | None:
    """Extract a dotted name from an Attribute or Name node."""
    if isinstance(node, cst.Name):
        return node.value
    if isinstance(node, cst.Attribute):
        prefix = _dotted_name(node.value)
        return f"{prefix}.{node.attr.value}" if prefix else None
    return None


def _is_docstring(statement: cst.CSTNode) -> bool:
    return (
        isinstance(statement, cst.SimpleStatementLine)
        and len(statement.body) == 1
        and isinstance(statement.body[0], cst.Expr)
        and isinstance(statement.body[0].value, (cst.SimpleString, cst.ConcatenatedString))
    )


def _is_future_import(statement: cst.CSTNode) -> bool:
    if not isinstance(statement, cst.SimpleStatementLine):
        return False
    return any(
        isinstance(small, cst.ImportFrom)
        and small.module is not None
        and _dotted_name(small.module) == "__future__"
        for small in statement.body
    )


class LiteralTransformer(cst.CSTTransformer):
    """Transformer that validates, and optionally expands, literal calls.

    Import statements are tracked as they are visited, so only calls made
    through a name bound to the marker module (or to one of its helpers)
    are recognized.
    """

    METADATA_DEPENDENCIES = (PositionProvider,)

    def __init__(
        self,
        path: str = "<string>",
        *,
        marker_module: str = DEFAULT_MARKER_MODULE,
        runtime_module: str = DEFAULT_RUNTIME_MODULE,
        rewrite: bool = False,
    ) -> None:
        super().__init__()
        self.path = path
        self.marker_module = marker_module
        self.runtime_module = runtime_module
        self.rewrite = rewrite
        self.diagnostics: list[Diagnostic] = []
        self.expanded = 0
        # Names bound to the marker module itself.
        self._module_names: set[str] = set()
        # Names bound directly to a helper, mapped to the literal kind.
        self._helper_names: dict[str, str] = {}
        self._runtime_imported = False

    def visit_Import(self, node: cst.Import) -> bool:
        for alias in node.names:
            name = _dotted_name(alias.name)
            if alias.asname is not None and isinstance(alias.asname.name, cst.Name):
                bound = alias.asname.name.value
            else:
                bound = None
            if name == self.marker_module:
                self._module_names.add(bound or name)
            if bound is None and name is not None:
                # ``import a.b`` also binds ``a``.
                if name == self.runtime_module or name.startswith(self.runtime_module + "."):
                    self._runtime_imported = True
        return False

    def visit_ImportFrom(self, node: cst.ImportFrom) -> bool:
        if node.relative or node.module is None:
            return False
        module = _dotted_name(node.module)
        if isinstance(node.names, cst.ImportStar):
            if module == self.marker_module:
                self._helper_names.update({kind: kind for kind in PARSERS})
            return False
        for alias in node.names:
            imported = _dotted_name(alias.name)
            if alias.asname is not None and isinstance(alias.asname.name, cst.Name):
                bound = alias.asname.name.value
            else:
                bound = imported
            if bound is None:
                continue
            if f"{module}.{imported}" == self.marker_module:
                self._module_names.add(bound)
            elif module == self.marker_module and imported in PARSERS:
                self._helper_names[bound] = imported
        return False

    def _macro_kind(self, func: cst.BaseExpression) -> str | None:
        if isinstance(func, cst.Name):
            return self._helper_names.get(func.value)
        if isinstance(func, cst.Attribute):
            prefix = _dotted_name(func.value)
            if prefix in self._module_names and func.attr.value in PARSERS:
                return func.attr.value
        return None

    @staticmethod
    def _literal_text(node: cst.Call) -> str | None:
        if len(node.args) != 1:
            return None
        arg = node.args[0]
        if arg.keyword is not None or arg.star:
            return None
        if not isinstance(arg.value, (cst.SimpleString, cst.ConcatenatedString)):
            return None
        value = arg.value.evaluated_value
        return value if isinstance(value, str) else None

    def _report(self, node: cst.CSTNode, literal: str, component: str, message: str) -> None:
        pos = self.get_metadata(PositionProvider, node)
        diagnostic = Diagnostic(
            self.path, pos.start.line, pos.start.column + 1, literal, component, message
        )
        logger.debug("Invalid literal: %s", diagnostic)
        self.diagnostics.append(diagnostic)

    def leave_Call(self, original_node: cst.Call, updated_node: cst.Call) -> cst.BaseExpression:
        kind = self._macro_kind(original_node.func)
        if kind is None:
            return updated_node

        text = self._literal_text(original_node)
        if text is None:
            self._report(
                original_node,
                cst.Module([]).code_for_node(original_node),
                "argument",
                "expected a single string constant",
            )
            return updated_node

        try:
            value = parse_literal(kind, text)
        except LiteralError as exc:
            self._report(original_node, text, exc.component, exc.message)
            return updated_node

        if not self.rewrite:
            return updated_node
        self.expanded += 1
        return cst.parse_expression(render(value, self.runtime_module))

    def leave_Module(self, original_node: cst.Module, updated_node: cst.Module) -> cst.Module:
        if not self.expanded or self._runtime_imported:
            return updated_node

        body = list(updated_node.body)
        index = 1 if body and _is_docstring(body[0]) else 0
        while index < len(body) and _is_future_import(body[index]):
            index += 1
        statement = cst.parse_statement(f"import {self.runtime_module}\n")
        return updated_node.with_changes(body=[*body[:index], statement, *body[index:]])


def transform_source(
    source: str,
    path: str = "<string>",
    *,
    marker_module: str = DEFAULT_MARKER_MODULE,
    runtime_module: str = DEFAULT_RUNTIME_MODULE,
    rewrite: bool = False,
) -> TransformResult:
    """Check, and with ``rewrite`` expand, the literal calls in ``source``.

    Valid literals are expanded even when others in the same source are
    invalid; callers decide whether to keep a result with diagnostics.

    Raises:
        libcst.ParserSyntaxError: If ``source`` is not valid Python.
    """
    wrapper = MetadataWrapper(cst.parse_module(source))
    transformer = LiteralTransformer(
        path,
        marker_module=marker_module,
        runtime_module=runtime_module,
        rewrite=rewrite,
    )
    new_module = wrapper.visit(transformer)
    return TransformResult(
        path=path,
        source=source,
        code=new_module.code if rewrite else source,
        diagnostics=transformer.diagnostics,
        expanded=transformer.expanded,
    )


def check_source(source: str, path: str = "<string>", **options: str) -> list[Diagnostic]:
    """Return a diagnostic for every invalid literal in ``source``."""
    return transform_source(source, path, rewrite=False, **options).diagnostics


def expand_source(source: str, path: str = "<string>", **options: str) -> TransformResult:
    """Expand every valid literal call in ``source``."""
    return transform_source(source, path, rewrite=True, **options)


def is_excluded(path: Path, exclude: Iterable[str]) -> bool:
    """Match ``path`` against glob patterns, whole path or any single part."""
    posix = path.as_posix()
    return any(
        fnmatch(posix, pattern) or any(fnmatch(part, pattern) for part in path.parts)
        for pattern in exclude
    )


def collect_files(paths: Sequence[Path], exclude: Iterable[str] = ()) -> list[Path]:
    """Expand directories to the Python files under them, sorted.

    Files named explicitly are kept even if they do not end in ``.py``.
    """
    exclude = tuple(exclude)
    found: set[Path] = set()
    for path in paths:
        if path.is_dir():
            candidates = (p for p in path.rglob("*.py") if p.is_file())
        else:
            candidates = iter((path,))
        for candidate in candidates:
            if is_excluded(candidate, exclude):
                logger.debug("Skipping excluded file %s", candidate)
                continue
            found.add(candidate)
    return sorted(found)


__all__ = [
    "DEFAULT_MARKER_MODULE",
    "Diagnostic",
    "TransformResult",
    "LiteralTransformer",
    "transform_source",
    "check_source",
    "expand_source",
    "is_excluded",
    "collect_files",
]

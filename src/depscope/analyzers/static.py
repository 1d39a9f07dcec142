"""Static dependency analysis of Python sources using the ``ast`` module.

Every top-level class and function is a source of facts. A fact is recorded
for each reference (base class, decorator, annotation, call, attribute
access) that resolves through the module's imports, to a definition in the
same module, or to a builtin class.
"""

from __future__ import annotations

import ast
import builtins
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Sequence

from ..exceptions import InvalidPathError, SourceSyntaxError
from ..graph.models import DependencyFact, DependencyGraph, Entity, EntityKind
from ..logging_config import get_logger

logger = get_logger(__name__)

BUILTIN_CLASSES = frozenset(
    name for name, obj in vars(builtins).items() if isinstance(obj, type) and not name.startswith("_")
)

_INTERFACE_BASES = {"Protocol"}
_ABSTRACT_BASES = {"ABC"}
_ABSTRACT_METACLASSES = {"ABCMeta"}
_ABSTRACT_DECORATORS = {"abstractmethod", "abstractproperty", "abstractclassmethod"}

DefinitionNode = (ast.ClassDef, ast.FunctionDef, ast.AsyncFunctionDef)


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome of a static analysis run: a graph, or the syntax error that stopped it."""

    graph: DependencyGraph = field(default_factory=DependencyGraph.empty)
    error: Optional[SourceSyntaxError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, graph: DependencyGraph) -> "AnalysisResult":
        return cls(graph=graph)

    @classmethod
    def failure(cls, error: SourceSyntaxError) -> "AnalysisResult":
        return cls(error=error)


@dataclass
class ParsedModule:
    name: str
    tree: ast.Module
    is_package: bool = False


def module_name_for(path: Path) -> str:
    """Dotted module name, walking up while parent directories are packages."""
    path = path.absolute()
    parts = [] if path.stem == "__init__" else [path.stem]
    parent = path.parent
    while (parent / "__init__.py").is_file():
        parts.insert(0, parent.name)
        parent = parent.parent
    return ".".join(parts) or path.parent.name


class StaticAnalyzer:
    """Build a dependency graph from Python source files."""

    def analyse(self, files: Sequence[Path]) -> AnalysisResult:
        modules: list[ParsedModule] = []
        for path in files:
            try:
                data = path.read_bytes()
            except OSError as e:
                raise InvalidPathError(path, str(e))
            try:
                tree = ast.parse(data, filename=str(path))
            except (SyntaxError, ValueError) as e:
                lineno = getattr(e, "lineno", None)
                reason = getattr(e, "msg", None) or str(e)
                logger.debug(f"Cannot parse {path}: {reason}")
                return AnalysisResult.failure(SourceSyntaxError(path, reason, lineno))
            modules.append(
                ParsedModule(module_name_for(path), tree, is_package=path.stem == "__init__")
            )

        graph = DependencyGraph.build(self.facts(modules))
        logger.info(
            f"Static analysis: {len(modules)} modules, {graph.edge_count} dependencies"
        )
        return AnalysisResult.success(graph)

    def analyse_source(self, source: str, module: str = "snippet") -> AnalysisResult:
        """Analyse a single in-memory module."""
        try:
            tree = ast.parse(source, filename=f"<{module}>")
        except SyntaxError as e:
            return AnalysisResult.failure(SourceSyntaxError(Path(f"<{module}>"), e.msg, e.lineno))
        return AnalysisResult.success(
            DependencyGraph.build(self.facts([ParsedModule(module, tree)]))
        )

    def facts(self, modules: Sequence[ParsedModule]) -> list[DependencyFact]:
        definitions: dict[str, EntityKind] = {m.name: EntityKind.NAMESPACE for m in modules}
        scopes = []
        for module in modules:
            scope = ModuleScope.from_module(module, definitions)
            definitions.update(scope.definitions)
            scopes.append(scope)

        facts: list[DependencyFact] = []
        for scope in scopes:
            facts.extend(scope.facts())
        return facts


class ModuleScope:
    """Name resolution for one module: imports plus top-level definitions."""

    def __init__(self, module: ParsedModule, known: dict[str, EntityKind]):
        self.module = module
        self.known = known
        self.imports: dict[str, tuple[str, bool]] = {}
        self.local: dict[str, str] = {}
        self.definitions: dict[str, EntityKind] = {}

    @classmethod
    def from_module(cls, module: ParsedModule, known: dict[str, EntityKind]) -> "ModuleScope":
        scope = cls(module, known)
        for node in ast.walk(module.tree):
            if isinstance(node, ast.Import):
                scope._add_import(node)
            elif isinstance(node, ast.ImportFrom):
                scope._add_import_from(node)
        for node in module.tree.body:
            if isinstance(node, DefinitionNode):
                qualified = f"{module.name}.{node.name}"
                scope.local[node.name] = qualified
                scope.definitions[qualified] = scope._kind_of_definition(node)
        return scope

    # ── Imports ──────────────────────────────────────────────────

    def _add_import(self, node: ast.Import) -> None:
        for alias in node.names:
            if alias.asname:
                self.imports[alias.asname] = (alias.name, True)
            else:
                root = alias.name.split(".")[0]
                self.imports[root] = (root, True)

    def _add_import_from(self, node: ast.ImportFrom) -> None:
        base = self._absolute_module(node.module, node.level)
        if base is None:
            return
        for alias in node.names:
            if alias.name == "*":
                continue
            target = f"{base}.{alias.name}" if base else alias.name
            self.imports[alias.asname or alias.name] = (target, False)

    def _absolute_module(self, module: Optional[str], level: int) -> Optional[str]:
        if level == 0:
            return module or ""
        package = self.module.name.split(".")
        if not self.module.is_package:
            package = package[:-1]
        if level > len(package):
            return None
        if level > 1:
            package = package[: len(package) - (level - 1)]
        parts = package + ([module] if module else [])
        return ".".join(parts)

    # ── Definitions ──────────────────────────────────────────────

    def _kind_of_definition(self, node: ast.AST) -> EntityKind:
        if not isinstance(node, ast.ClassDef):
            return EntityKind.FUNCTION
        base_names = {_last_segment(base) for base in node.bases}
        if base_names & _INTERFACE_BASES:
            return EntityKind.INTERFACE
        if base_names & _ABSTRACT_BASES:
            return EntityKind.ABSTRACT_CLASS
        for keyword in node.keywords:
            if keyword.arg == "metaclass" and _last_segment(keyword.value) in _ABSTRACT_METACLASSES:
                return EntityKind.ABSTRACT_CLASS
        for item in node.body:
            if isinstance(item, (ast.FunctionDef, ast.AsyncFunctionDef)):
                if {_last_segment(d) for d in item.decorator_list} & _ABSTRACT_DECORATORS:
                    return EntityKind.ABSTRACT_CLASS
        return EntityKind.CLASS

    def kind_of(self, name: str) -> EntityKind:
        return self.definitions.get(name) or self.known.get(name) or EntityKind.guess(name)

    # ── Resolution ───────────────────────────────────────────────

    def resolve(self, name: str, attrs: Sequence[str] = ()) -> Optional[Entity]:
        if name in self.imports:
            base, is_module = self.imports[name]
            qualified = _entity_name(base, attrs)
            if is_module and qualified == base:
                return Entity(qualified, EntityKind.NAMESPACE)
            return Entity(qualified, self.kind_of(qualified))
        if name in self.local:
            qualified = self.local[name]
            return Entity(qualified, self.kind_of(qualified))
        if name in BUILTIN_CLASSES:
            return Entity(f"builtins.{name}", EntityKind.CLASS)
        return None

    def facts(self) -> Iterable[DependencyFact]:
        for node in self.module.tree.body:
            if not isinstance(node, DefinitionNode):
                continue
            source = Entity(self.local[node.name], self.kind_of(self.local[node.name]))
            collector = ReferenceCollector(self)
            collector.visit(node)
            for target in collector.targets:
                if target.name == source.name or target.name.startswith(source.name + "."):
                    continue
                yield DependencyFact(source, target)


class ReferenceCollector(ast.NodeVisitor):
    """Collect every resolvable reference below a definition."""

    def __init__(self, scope: ModuleScope):
        self.scope = scope
        self.targets: list[Entity] = []

    def _record(self, entity: Optional[Entity]) -> None:
        if entity is not None:
            self.targets.append(entity)

    def visit_Name(self, node: ast.Name) -> None:
        if isinstance(node.ctx, ast.Load):
            self._record(self.scope.resolve(node.id))

    def visit_Attribute(self, node: ast.Attribute) -> None:
        attrs: list[str] = []
        current: ast.AST = node
        while isinstance(current, ast.Attribute):
            attrs.append(current.attr)
            current = current.value
        if isinstance(current, ast.Name):
            attrs.reverse()
            self._record(self.scope.resolve(current.id, attrs))
            return
        self.generic_visit(node)

    def visit_FunctionDef(self, node: ast.FunctionDef) -> None:
        self.generic_visit(node)
        self._forward_references(node.returns)

    visit_AsyncFunctionDef = visit_FunctionDef

    def visit_arg(self, node: ast.arg) -> None:
        self.generic_visit(node)
        self._forward_references(node.annotation)

    def visit_AnnAssign(self, node: ast.AnnAssign) -> None:
        self.generic_visit(node)
        self._forward_references(node.annotation)

    def _forward_references(self, annotation: Optional[ast.AST]) -> None:
        """Resolve string annotations such as ``"Graph"`` or ``list["Graph"]``."""
        if annotation is None:
            return
        for sub in ast.walk(annotation):
            if isinstance(sub, ast.Constant) and isinstance(sub.value, str):
                try:
                    parsed = ast.parse(sub.value, mode="eval")
                except SyntaxError:
                    continue
                self.visit(parsed.body)


def _entity_name(base: str, attrs: Sequence[str]) -> str:
    """Qualified name for ``base.attr1.attr2``, cut after the first class-like segment."""
    if base.rsplit(".", 1)[-1][:1].isupper():
        return base
    name = base
    for attr in attrs:
        name = f"{name}.{attr}"
        if attr[:1].isupper():
            break
    return name


def _last_segment(node: ast.AST) -> str:
    if isinstance(node, ast.Subscript):
        node = node.value
    if isinstance(node, ast.Attribute):
        return node.attr
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Call):
        return _last_segment(node.func)
    return ""

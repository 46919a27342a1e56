"""Script transformer: top-level script statements -> class members.

A single forward pass over the script's top-level statements builds the member
registry, collects routed imports and queues the statements whose output
depends on the complete registry (functions, lifecycle hooks, bare calls).
Finalization then writes properties, constructor statements, lifecycle methods
and metadata merges into the class skeleton.

    const count = signal(0);          count = signal(0);
    let open = false;          ->     constructor() {
    function inc() { ... }              const count = this.count;
                                        let open = false;
                                        function inc() { ... }
                                        this.inc = inc.bind(this);
                                        Object.defineProperties(this, { open: ... });
                                      }
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable

from tree_sitter import Node

from ..errors import InvalidImportAttributeError, MetadataShapeError, StructuralError
from ..frontend.parse import Script, child_of_type, is_function_like, named_children
from ..ir import (
    AccessorDescriptor,
    ClassSkeleton,
    Constructor,
    Deferred,
    Member,
    MetadataObject,
    Source,
)
from .metadata import (
    add_exposed_properties,
    merge_array_metadata,
    merge_define_metadata,
    property_key,
)
from .scope import THIS, resolve_initializer

ROUTE_ATTRIBUTE = "analog"
ROUTE_KEYS: tuple[str, ...] = ("imports", "viewProviders", "providers", "exposes")
SFC_EXTENSIONS: tuple[str, ...] = (".analog", ".ag")

DEFINE_METADATA = "defineMetadata"
ON_INIT = "onInit"
ON_DESTROY = "onDestroy"
HOOKS_MAP: dict[str, str] = {ON_INIT: "ngOnInit", ON_DESTROY: "ngOnDestroy"}

# Route metadata is read by the router from the module export, not the instance.
ROUTE_META = "routeMeta"

DESTRUCTURED_PREFIX = "__destructured"

# Declarations without runtime semantics, hoisted to module scope unchanged.
TYPE_DECLARATIONS: set[str] = {"interface_declaration", "type_alias_declaration"}


# ============================================================
# DIAGNOSTICS
# ============================================================


class Diagnostic:
    """A non-fatal finding with location in the script block."""

    def __init__(self, lineno: int, col: int, category: str, message: str):
        self.lineno: int = lineno
        self.col: int = col
        self.category: str = category
        self.message: str = message

    def __repr__(self) -> str:
        return (
            "warning:"
            + str(self.lineno)
            + ":"
            + str(self.col)
            + ": ["
            + self.category
            + "] "
            + self.message
        )


class TransformResult:
    """The filled skeleton plus the warnings raised while filling it."""

    def __init__(self, skeleton: ClassSkeleton) -> None:
        self.skeleton: ClassSkeleton = skeleton
        self.diagnostics: list[Diagnostic] = []

    def add_warning(self, node: Node, category: str, message: str) -> None:
        row, col = node.start_point
        self.diagnostics.append(Diagnostic(row + 1, col, category, message))

    def warnings(self) -> list[Diagnostic]:
        return self.diagnostics


# ============================================================
# DESTRUCTURING
# ============================================================


@dataclass
class BindingElement:
    """One name bound by a destructuring pattern.

    accessor is appended to the virtual member: `.a`, `[0]`, `['a-b']`.
    """

    name: str
    accessor: str
    default: str | None = None
    is_rest: bool = False


def _access_producer(virtual: str, element: BindingElement) -> Callable[[], str]:
    def produce() -> str:
        access = THIS + virtual + element.accessor
        if element.default is None:
            return access
        # only undefined triggers the default, as in destructuring
        return access + " === undefined ? " + element.default + " : " + access

    return produce


def _rest_producer(pattern: str, virtual: str, name: str) -> Callable[[], str]:
    def produce() -> str:
        return (
            "(() => {\n"
            + "  const " + pattern + " = " + THIS + virtual + ";\n"
            + "  return " + name + ";\n"
            + "})()"
        )

    return produce


# ============================================================
# TRANSFORMER
# ============================================================


class ScriptTransformer:
    """Fills one class skeleton from one parsed script. Single use."""

    def __init__(self, file_path: str, script: Script, skeleton: ClassSkeleton) -> None:
        self.file_path: str = file_path
        self.script: Script = script
        self.skeleton: ClassSkeleton = skeleton
        self.members: dict[str, Member] = {}
        self.pending: list[Callable[[], None]] = []
        self.routes: dict[str, list[str]] = {key: [] for key in ROUTE_KEYS}
        self.accessors: list[AccessorDescriptor] = []
        self.result: TransformResult = TransformResult(skeleton)
        self._declared_at: dict[str, Node] = {}
        self._destructured_count = 0
        self._comments: list[str] = []
        self._metadata: MetadataObject = MetadataObject()
        self._constructor: Constructor = Constructor()

    def transform(self) -> TransformResult:
        self._locate()
        for node in self.script.statements():
            self._visit(node)
        self._finalize()
        return self.result

    def _text(self, node: Node) -> str:
        return self.script.text(node)

    def _locate(self) -> None:
        """Find the class, decorator metadata and constructor to fill."""
        skeleton = self.skeleton
        expected = skeleton.class_name + "Analog" + skeleton.kind
        if not skeleton.class_name or skeleton.entity_name != expected:
            raise StructuralError("Missing class", self.file_path)
        decorator = skeleton.decorator
        if decorator is None or decorator.name != skeleton.kind:
            raise StructuralError("Missing metadata", self.file_path)
        if not decorator.arguments or not isinstance(decorator.arguments[0], MetadataObject):
            raise MetadataShapeError("Invalid metadata arguments", self.file_path)
        if skeleton.constructor is None:
            raise StructuralError("Invalid constructor body", self.file_path)
        self._metadata = decorator.arguments[0]
        self._constructor = skeleton.constructor

    # --- Statement dispatch ---

    def _visit(self, node: Node) -> None:
        if node.type == "comment":
            self._comments.append(self._text(node))
            return
        leading = self._comments
        self._comments = []
        if node.type == "import_statement":
            self.skeleton.imports.extend(leading)
            self._visit_import(node)
            return
        full_text = "\n".join(leading + [self._text(node)])
        decl = node
        exported = False
        if node.type == "export_statement":
            if child_of_type(node, "default") is not None:
                self.result.add_warning(
                    node, "export", "default export is reserved for the generated class"
                )
                return
            inner = node.child_by_field_name("declaration")
            if inner is None:
                self.result.add_warning(
                    node, "export", "only exported declarations are supported"
                )
                return
            decl = inner
            exported = True
        if decl.type in ("lexical_declaration", "variable_declaration"):
            self._visit_variable(decl, exported, full_text)
        elif decl.type in ("function_declaration", "generator_function_declaration"):
            self._visit_function(decl, exported, full_text)
        elif decl.type in TYPE_DECLARATIONS:
            self.skeleton.statements.append(full_text)
        elif node.type == "expression_statement":
            self._visit_expression(node, full_text)
        elif exported:
            self.result.add_warning(
                node, "export", "unsupported exported declaration: " + decl.type
            )

    # --- Imports ---

    def _visit_import(self, node: Node) -> None:
        source_node = node.child_by_field_name("source")
        if source_node is None:
            source_node = child_of_type(node, "string")
        if source_node is None:
            # import x = require('...')
            self.skeleton.imports.append(self._text(node))
            return
        specifier = self._text(source_node)[1:-1]
        clause = child_of_type(node, "import_clause")
        attribute = child_of_type(node, "import_attribute")
        default_name: str | None = None
        named: list[str] = []
        if clause is not None:
            for child in named_children(clause):
                if child.type == "identifier":
                    default_name = self._text(child)
                elif child.type == "named_imports":
                    for spec in named_children(child):
                        if spec.type != "import_specifier":
                            continue
                        alias = spec.child_by_field_name("alias")
                        name = spec.child_by_field_name("name")
                        bound = alias if alias is not None else name
                        if bound is not None:
                            named.append(self._text(bound))
        synthesized: str | None = None
        if clause is None and specifier.endswith(SFC_EXTENSIONS):
            # import './foo.analog' -> import fooanalog from './foo.analog'
            synthesized = re.sub(r"[^a-zA-Z]", "", specifier)
            default_name = synthesized
        route, passthrough = self._split_attributes(attribute)
        if route:
            if default_name is not None:
                self.routes[route].append(default_name)
            self.routes[route].extend(named)
        self.skeleton.imports.append(
            self._render_import(node, source_node, synthesized, attribute, passthrough)
        )

    def _split_attributes(self, attribute: Node | None) -> tuple[str, list[str]]:
        """Return (route, pass-through attribute texts) of an import attribute clause."""
        if attribute is None:
            return ("", [])
        obj = child_of_type(attribute, "object")
        if obj is None:
            return ("", [])
        route = ""
        passthrough: list[str] = []
        for prop in named_children(obj):
            key_node = prop.child_by_field_name("key") if prop.type == "pair" else None
            value_node = prop.child_by_field_name("value") if prop.type == "pair" else None
            if key_node is not None and value_node is not None:
                if property_key(key_node, self.script) == ROUTE_ATTRIBUTE:
                    value = self._text(value_node).replace("'", "").replace('"', "")
                    if value not in self.routes:
                        raise InvalidImportAttributeError(
                            "Invalid Analog import attribute " + value + " in",
                            self.file_path,
                        )
                    route = value
                    continue
            passthrough.append(self._text(prop))
        return (route, passthrough)

    def _render_import(
        self,
        node: Node,
        source_node: Node,
        synthesized: str | None,
        attribute: Node | None,
        passthrough: list[str],
    ) -> str:
        if synthesized is None and attribute is None:
            return self._text(node)
        if synthesized is not None:
            head = "import " + synthesized + " from " + self._text(source_node)
        else:
            head = self.script.source[node.start_byte : attribute.start_byte]  # type: ignore[union-attr]
            head = head.decode("utf-8").rstrip()
        if attribute is not None and passthrough:
            keyword = attribute.children[0].type
            head += " " + keyword + " { " + ", ".join(passthrough) + " }"
        return head + ";"

    # --- Variables ---

    def _visit_variable(self, decl: Node, exported: bool, full_text: str) -> None:
        is_let = decl.children[0].type == "let"
        declarators = [c for c in named_children(decl) if c.type == "variable_declarator"]
        if not declarators:
            return
        if len(declarators) > 1:
            self.result.add_warning(
                decl,
                "declaration",
                "multiple declarators are not supported, only the first is compiled",
            )
        declarator = declarators[0]
        name_node = declarator.child_by_field_name("name")
        value = declarator.child_by_field_name("value")
        if name_node is None:
            return
        if is_let and exported:
            self.result.add_warning(
                decl, "export", "let variable cannot be exported: " + self._text(name_node)
            )
            return
        if exported:
            self.skeleton.statements.append(full_text)
        if name_node.type in ("object_pattern", "array_pattern"):
            self._visit_destructuring(name_node, value)
            return
        name = self._text(name_node)
        self._declared_at[name] = declarator
        self.members[name] = Member(
            name=name,
            initializer=Source(value) if value is not None else None,
            is_let=is_let,
            is_exported=exported,
        )

    def _visit_destructuring(self, pattern: Node, value: Node | None) -> None:
        if pattern.type == "object_pattern":
            elements = self._object_elements(pattern)
        else:
            elements = self._array_elements(pattern)
        if not elements:
            return
        self._destructured_count += 1
        virtual = DESTRUCTURED_PREFIX + str(self._destructured_count)
        self.members[virtual] = Member(
            name=virtual,
            initializer=Source(value) if value is not None else None,
            is_virtual=True,
        )
        self._declared_at[virtual] = pattern
        pattern_text = self._text(pattern)
        for element in elements:
            if element.is_rest:
                produce = _rest_producer(pattern_text, virtual, element.name)
            else:
                produce = _access_producer(virtual, element)
            self.members[element.name] = Member(name=element.name, initializer=Deferred(produce))

    def _key_accessor(self, key: Node) -> str:
        text = self._text(key)
        if key.type == "computed_property_name":
            return text
        if key.type in ("string", "number"):
            return "[" + text + "]"
        return "." + text

    def _nested(self, node: Node) -> None:
        self.result.add_warning(
            node, "destructuring", "nested destructuring is not supported: " + self._text(node)
        )

    def _object_elements(self, pattern: Node) -> list[BindingElement]:
        elements: list[BindingElement] = []
        for child in named_children(pattern):
            if child.type == "shorthand_property_identifier_pattern":
                name = self._text(child)
                elements.append(BindingElement(name, "." + name))
            elif child.type == "object_assignment_pattern":
                left = child.child_by_field_name("left")
                right = child.child_by_field_name("right")
                if left is None or left.type != "shorthand_property_identifier_pattern":
                    self._nested(child)
                    continue
                name = self._text(left)
                default = self._text(right) if right is not None else None
                elements.append(BindingElement(name, "." + name, default))
            elif child.type == "pair_pattern":
                key = child.child_by_field_name("key")
                target = child.child_by_field_name("value")
                if key is None or target is None:
                    continue
                default = None
                if target.type == "assignment_pattern":
                    right = target.child_by_field_name("right")
                    default = self._text(right) if right is not None else None
                    target = target.child_by_field_name("left")
                if target is None or target.type != "identifier":
                    self._nested(child)
                    continue
                elements.append(
                    BindingElement(self._text(target), self._key_accessor(key), default)
                )
            elif child.type == "rest_pattern":
                self._rest_element(child, elements)
        return elements

    def _array_elements(self, pattern: Node) -> list[BindingElement]:
        elements: list[BindingElement] = []
        index = 0
        for child in pattern.children:
            if child.type == ",":
                index += 1
                continue
            if not child.is_named or child.type == "comment":
                continue
            accessor = "[" + str(index) + "]"
            if child.type == "identifier":
                elements.append(BindingElement(self._text(child), accessor))
            elif child.type == "assignment_pattern":
                left = child.child_by_field_name("left")
                right = child.child_by_field_name("right")
                if left is None or left.type != "identifier":
                    self._nested(child)
                    continue
                default = self._text(right) if right is not None else None
                elements.append(BindingElement(self._text(left), accessor, default))
            elif child.type == "rest_pattern":
                self._rest_element(child, elements)
            else:
                self._nested(child)
        return elements

    def _rest_element(self, node: Node, elements: list[BindingElement]) -> None:
        targets = named_children(node)
        if not targets or targets[0].type != "identifier":
            self._nested(node)
            return
        elements.append(BindingElement(self._text(targets[0]), "", is_rest=True))

    # --- Functions ---

    def _visit_function(self, decl: Node, exported: bool, full_text: str) -> None:
        name_node = decl.child_by_field_name("name")
        if name_node is None:
            return
        name = self._text(name_node)
        if exported:
            self.skeleton.statements.append(full_text)

            def expose() -> None:
                self.skeleton.add_property(name, name, scope="protected", readonly=True)

            self.pending.append(expose)
            return

        def inline() -> None:
            self._constructor.statements.append(full_text)
            self._constructor.statements.append(THIS + name + " = " + name + ".bind(this);")

        self.pending.append(inline)

    # --- Calls ---

    def _visit_expression(self, node: Node, full_text: str) -> None:
        exprs = named_children(node)
        if not exprs or exprs[0].type != "call_expression":
            return
        call = exprs[0]
        callee = call.child_by_field_name("function")
        fn_name = self._text(callee) if callee is not None else ""
        args_node = call.child_by_field_name("arguments")
        args: list[Node] = []
        if args_node is not None and args_node.type == "arguments":
            args = named_children(args_node)
        if fn_name == DEFINE_METADATA:
            if not args or args[0].type != "object":
                raise MetadataShapeError(
                    DEFINE_METADATA + " expects an object literal in", self.file_path
                )
            merge_define_metadata(args[0], self.script, self._metadata, self.skeleton)
            return
        if fn_name in HOOKS_MAP:
            hook = args[0] if args else None
            if hook is None or not is_function_like(hook):
                return
            self.pending.append(self._lifecycle(fn_name, self._text(hook)))
            return

        def call_in_constructor() -> None:
            self._constructor.statements.append(full_text)

        self.pending.append(call_in_constructor)

    def _lifecycle(self, hook_name: str, callback: str) -> Callable[[], None]:
        def register() -> None:
            self._constructor.statements.append(THIS + hook_name + " = " + callback + ";")
            method_name = HOOKS_MAP[hook_name]
            if self.skeleton.find_method(method_name) is None:
                self.skeleton.add_method(method_name, [THIS + hook_name + "();"])

        return register

    # --- Finalization ---

    def _finalize(self) -> None:
        for member in self.members.values():
            if member.is_let:
                self._emit_let(member)
            else:
                self._emit_property(member)
        for operation in self.pending:
            operation()
        if self.skeleton.kind == "Component":
            merge_array_metadata(self._metadata, "viewProviders", self.routes["viewProviders"])
            merge_array_metadata(self._metadata, "imports", self.routes["imports"])
            add_exposed_properties(self.skeleton, self.routes["exposes"])
        merge_array_metadata(self._metadata, "providers", self.routes["providers"])
        if self.accessors:
            body = "".join("  " + accessor.render() + ",\n" for accessor in self.accessors)
            self._constructor.statements.append(
                "Object.defineProperties(this, {\n" + body + "});"
            )

    def _emit_let(self, member: Member) -> None:
        statement = "let " + member.name
        is_callable = False
        init = member.initializer
        if isinstance(init, Deferred):
            statement += " = " + init.produce()
        elif isinstance(init, Source):
            statement += " = " + self._text(init.node)
            is_callable = is_function_like(init.node)
        self._constructor.statements.append(statement + ";")
        self.accessors.append(AccessorDescriptor(member.name, is_callable))

    def _emit_property(self, member: Member) -> None:
        name = member.name
        init = member.initializer
        if isinstance(init, Deferred):
            text = init.produce()
        elif member.is_exported:
            # alias the module-level export instead of duplicating its value
            text = name
        elif init is None:
            self.result.add_warning(
                self._declared_at.get(name, self.script.root),
                "declaration",
                "const variable must have an initializer: " + name,
            )
            return
        else:
            text = resolve_initializer(init.node, self.script, self.members)
        scope = None
        if member.is_exported:
            scope = "protected"
        elif member.is_virtual:
            scope = "private"
        self.skeleton.add_property(
            name, text, scope=scope, readonly=member.is_exported or member.is_virtual
        )
        if name != ROUTE_META and not member.is_virtual:
            self._constructor.statements.append("const " + name + " = " + THIS + name + ";")


def transform_script(file_path: str, script: Script, skeleton: ClassSkeleton) -> TransformResult:
    """Fill skeleton from script. The skeleton is mutated in place."""
    return ScriptTransformer(file_path, script, skeleton).transform()

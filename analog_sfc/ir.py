"""analog-sfc IR - the generated class skeleton and the script member model.

This module defines the data the compiler passes between phases.

Architecture:
    .analog file -> Frontend (blocks, classify, parse) -> [IR] -> Middleend (transform) -> Backend -> TypeScript

The frontend builds a ClassSkeleton. The middleend fills it from the script block
using the Member registry. The backend renders the skeleton to text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Literal, Union

if TYPE_CHECKING:
    from tree_sitter import Node


EntityKind = Literal["Component", "Directive"]
"""Angular entity the file compiles to. Components have renderable output."""

Visibility = Literal["protected", "private"]


# ============================================================
# INITIALIZERS
#
# A member initializer is either a parsed expression that still needs
# scope resolution, or text produced on demand once the registry is known.
# ============================================================


@dataclass
class Source:
    """Initializer taken verbatim from the script: a tree-sitter expression node."""

    node: Node


@dataclass
class Deferred:
    """Initializer whose text is computed at emission time."""

    produce: Callable[[], str]


Initializer = Union[Source, Deferred]


# ============================================================
# MEMBERS
# ============================================================


@dataclass
class Member:
    """A script-scope binding that becomes instance state.

    Invariants:
    - is_virtual members are never aliased into the constructor
    - is_let members become constructor locals, never class properties
    - a let member is never exported (rejected at declaration)
    """

    name: str
    initializer: Initializer | None
    is_let: bool = False
    is_exported: bool = False
    is_virtual: bool = False


@dataclass
class AccessorDescriptor:
    """Exposes a constructor-local let binding as an instance property.

    Callable bindings get a bound value slot; everything else a get/set pair
    forwarding to the captured local.
    """

    property_name: str
    is_callable: bool

    def render(self) -> str:
        name = self.property_name
        if self.is_callable:
            return f"{name}: {{ value: {name}.bind(this), writable: true }}"
        return f"{name}: {{ get() {{ return {name}; }}, set(v) {{ {name} = v; }} }}"


# ============================================================
# DECORATOR METADATA
# ============================================================


@dataclass
class ArrayLiteral:
    """Array-valued metadata entry that merges can append to."""

    elements: list[str] = field(default_factory=list)

    def render(self) -> str:
        return "[" + ", ".join(self.elements) + "]"


MetadataValue = Union[str, ArrayLiteral]


class MetadataObject:
    """Ordered key -> literal text map: the decorator's object literal argument."""

    def __init__(self) -> None:
        self.entries: dict[str, MetadataValue] = {}

    def get(self, key: str) -> MetadataValue | None:
        return self.entries.get(key)

    def set(self, key: str, value: MetadataValue) -> None:
        """Add a property, or overwrite it in place if present."""
        self.entries[key] = value

    def replace(self, key: str, value: MetadataValue) -> None:
        """Remove a property and append it again at the end."""
        self.entries.pop(key, None)
        self.entries[key] = value

    def keys(self) -> list[str]:
        return list(self.entries.keys())

    def render_entries(self) -> list[str]:
        result: list[str] = []
        for key, value in self.entries.items():
            text = value.render() if isinstance(value, ArrayLiteral) else value
            result.append(key + ": " + text)
        return result


@dataclass
class Decorator:
    """Class decorator call. The first argument must be a MetadataObject."""

    name: str
    arguments: list[object] = field(default_factory=list)


# ============================================================
# CLASS SKELETON
# ============================================================


@dataclass
class Property:
    """Class field. initializer is TypeScript text."""

    name: str
    initializer: str | None = None
    scope: Visibility | None = None
    readonly: bool = False


@dataclass
class Method:
    """Parameterless class method with a flat statement list."""

    name: str
    statements: list[str] = field(default_factory=list)


@dataclass
class Constructor:
    statements: list[str] = field(default_factory=list)


@dataclass
class ClassSkeleton:
    """The generated module: one decorated default-exported class.

    Invariants:
    - entity_name == class_name + "Analog" + kind
    - decorator.name == kind
    - imports preserve script order, after core_imports
    - statements are module-level text emitted after the class
    """

    class_name: str
    file_name: str
    kind: EntityKind
    entity_name: str
    decorator: Decorator | None
    constructor: Constructor | None
    core_imports: list[str] = field(default_factory=list)
    imports: list[str] = field(default_factory=list)
    properties: list[Property] = field(default_factory=list)
    methods: list[Method] = field(default_factory=list)
    statements: list[str] = field(default_factory=list)

    def add_property(
        self,
        name: str,
        initializer: str | None,
        scope: Visibility | None = None,
        readonly: bool = False,
    ) -> Property:
        prop = Property(name=name, initializer=initializer, scope=scope, readonly=readonly)
        self.properties.append(prop)
        return prop

    def find_method(self, name: str) -> Method | None:
        for method in self.methods:
            if method.name == name:
                return method
        return None

    def add_method(self, name: str, statements: list[str]) -> Method:
        method = Method(name=name, statements=statements)
        self.methods.append(method)
        return method

"""TypeScript backend: ClassSkeleton -> module source text."""

from __future__ import annotations

from ..ir import ClassSkeleton, Method, MetadataObject, Property
from .util import Emitter, template_literal_lines


class TsBackend(Emitter):
    """Emit the generated module for one .analog file."""

    def emit(self, skeleton: ClassSkeleton) -> str:
        self.indent = 0
        self.lines = []
        for imp in skeleton.core_imports:
            self.line(imp)
        for imp in skeleton.imports:
            self.block(imp)
        self.line()
        self._emit_decorator(skeleton)
        self._emit_class(skeleton)
        for statement in skeleton.statements:
            self.line()
            self.block(statement)
        return self.output() + "\n"

    def _emit_decorator(self, skeleton: ClassSkeleton) -> None:
        decorator = skeleton.decorator
        if decorator is None:
            return
        metadata = decorator.arguments[0] if decorator.arguments else None
        if not isinstance(metadata, MetadataObject):
            self.line(f"@{decorator.name}()")
            return
        self.line(f"@{decorator.name}({{")
        self.indent += 1
        entries = metadata.render_entries()
        for i, entry in enumerate(entries):
            self.block(entry + ("," if i < len(entries) - 1 else ""))
        self.indent -= 1
        self.line("})")

    def _emit_class(self, skeleton: ClassSkeleton) -> None:
        self.line(f"export default class {skeleton.entity_name} {{")
        self.indent += 1
        for prop in skeleton.properties:
            self._emit_property(prop)
        if skeleton.constructor is not None:
            statements = skeleton.constructor.statements
            if statements:
                self.line("constructor() {")
                self.indent += 1
                for statement in statements:
                    self.block(statement)
                self.indent -= 1
                self.line("}")
            else:
                self.line("constructor() {}")
        for method in skeleton.methods:
            self.line()
            self._emit_method(method)
        self.indent -= 1
        self.line("}")

    def _emit_property(self, prop: Property) -> None:
        modifiers = ""
        if prop.scope is not None:
            modifiers += prop.scope + " "
        if prop.readonly:
            modifiers += "readonly "
        if prop.initializer is None:
            self.block(f"{modifiers}{prop.name};")
        else:
            self.block(f"{modifiers}{prop.name} = {prop.initializer};")

    def _emit_method(self, method: Method) -> None:
        self.line(f"{method.name}() {{")
        self.indent += 1
        for statement in method.statements:
            self.block(statement)
        self.indent -= 1
        self.line("}")


def emit_typescript(skeleton: ClassSkeleton) -> str:
    """Render the generated module."""
    return TsBackend().emit(skeleton)


def format_typescript(source: str) -> str:
    """Light formatting pass: strip trailing whitespace, one newline at EOF.

    Full pretty-printing belongs to the build integration's formatter.
    """
    frozen = template_literal_lines(source)
    lines = source.split("\n")
    for i, line in enumerate(lines):
        # a line ending inside a template literal keeps its trailing text
        if i + 1 not in frozen:
            lines[i] = line.rstrip()
    return "\n".join(lines).rstrip("\n") + "\n"

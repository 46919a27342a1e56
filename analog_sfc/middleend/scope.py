"""Scope resolution for member initializers.

Top-level script bindings become instance members, so an initializer that reads
another binding must read it through `this`. The rewrite is driven by the root
identifier of call and property-access chains:

    route.snapshot.paramMap.get('id')  ->  root `route`

If the root names a registered member the callee (or access chain) is prefixed
with `this.`. Call arguments are resolved independently. Everything that is not
a call, property access or bare identifier is emitted as written.
"""

from __future__ import annotations

from collections.abc import Container

from tree_sitter import Node

from ..frontend.parse import Script, named_children

THIS = "this."

OUTPUT_FROM_OBSERVABLE = "outputFromObservable"

# Framework factory calls: module-level functions, never members.
SIGNAL_FACTORIES: set[str] = {
    "signal",
    "computed",
    "effect",
    "input",
    "model",
    "output",
    "linkedSignal",
    "resource",
    "viewChild",
    "viewChildren",
    "contentChild",
    "contentChildren",
    OUTPUT_FROM_OBSERVABLE,
}

REQUIRED_SIGNAL_FACTORIES: set[str] = {
    "input.required",
    "model.required",
    "viewChild.required",
    "contentChild.required",
}


def root_identifier(node: Node) -> Node:
    """Descend through property-access objects to the leftmost expression."""
    while node.type == "member_expression":
        obj = node.child_by_field_name("object")
        if obj is None:
            break
        node = obj
    return node


def is_member_root(node: Node, script: Script, members: Container[str]) -> bool:
    root = root_identifier(node)
    return root.type == "identifier" and script.text(root) in members


def resolve_expression(node: Node, script: Script, members: Container[str]) -> str:
    """Qualify member references in a call or property-access expression."""
    if node.type == "call_expression":
        callee = node.child_by_field_name("function")
        if callee is None:
            return script.text(node)
        callee_text = script.text(callee)
        if is_member_root(callee, script, members):
            callee_text = THIS + callee_text
        type_args = node.child_by_field_name("type_arguments")
        if type_args is not None:
            callee_text += script.text(type_args)
        args_node = node.child_by_field_name("arguments")
        if args_node is None:
            return script.text(node)
        if args_node.type != "arguments":
            # tagged template
            return callee_text + script.text(args_node)
        args = [resolve_argument(arg, script, members) for arg in named_children(args_node)]
        return callee_text + "(" + ", ".join(args) + ")"
    if node.type in ("member_expression", "identifier"):
        if is_member_root(node, script, members):
            return THIS + script.text(node)
        return script.text(node)
    return script.text(node)


def resolve_argument(node: Node, script: Script, members: Container[str]) -> str:
    text = script.text(node)
    if node.type == "identifier" and text in members:
        return THIS + text
    if node.type in ("member_expression", "call_expression"):
        return resolve_expression(node, script, members)
    return text


def is_signal_factory(callee_text: str) -> bool:
    return callee_text in SIGNAL_FACTORIES or callee_text in REQUIRED_SIGNAL_FACTORIES


def resolve_initializer(node: Node, script: Script, members: Container[str]) -> str:
    """Text of a member initializer with member references qualified.

    Signal factory calls are framework calls and stay as written, except
    outputFromObservable whose argument may read instance state.
    """
    if node.type == "call_expression":
        callee = node.child_by_field_name("function")
        if callee is not None and is_signal_factory(script.text(callee)):
            if script.text(callee) == OUTPUT_FROM_OBSERVABLE:
                return resolve_expression(node, script, members)
            return script.text(node)
    return resolve_expression(node, script, members)

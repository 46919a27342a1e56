"""Merges into the decorator metadata object and the `exposes` expansion."""

from __future__ import annotations

import re

from tree_sitter import Node

from ..frontend.parse import Script, named_children
from ..ir import ArrayLiteral, ClassSkeleton, MetadataObject

# Properties defineMetadata may not set: the compiler owns them.
INVALID_METADATA_PROPERTIES: set[str] = {
    "template",
    "standalone",
    "changeDetection",
    "styles",
    "outputs",
    "inputs",
}


def merge_array_metadata(metadata: MetadataObject, key: str, items: list[str]) -> None:
    """Append items to an array-valued metadata property, creating it if absent.

    Appends are not deduplicated. A property holding a non-array expression
    is left untouched.
    """
    if not items:
        return
    value = metadata.get(key)
    if value is None:
        value = ArrayLiteral()
        metadata.set(key, value)
    if isinstance(value, ArrayLiteral):
        value.elements.extend(items)


def parse_exposes(text: str) -> list[str]:
    """`[a, b, c]` -> ["a", "b", "c"]."""
    names: list[str] = []
    for item in re.sub(r"[\[\]]", "", text).split(","):
        name = item.strip()
        if name:
            names.append(name)
    return names


def add_exposed_properties(skeleton: ClassSkeleton, names: list[str]) -> None:
    """Expose module bindings to the template as protected readonly aliases."""
    for name in names:
        skeleton.add_property(name, name, scope="protected", readonly=True)


def property_key(node: Node, script: Script) -> str:
    text = script.text(node)
    if node.type == "string":
        return text[1:-1]
    return text


def metadata_value(node: Node, script: Script) -> str | ArrayLiteral:
    if node.type == "array":
        return ArrayLiteral([script.text(el) for el in named_children(node)])
    return script.text(node)


def merge_define_metadata(
    obj: Node, script: Script, metadata: MetadataObject, skeleton: ClassSkeleton
) -> int:
    """Merge a defineMetadata object literal. Returns the number of properties merged.

    Only `key: value` properties count; shorthand, spread and method
    properties are skipped along with the denylisted keys.
    """
    merged = 0
    for prop in named_children(obj):
        if prop.type != "pair":
            continue
        key_node = prop.child_by_field_name("key")
        value_node = prop.child_by_field_name("value")
        if key_node is None or value_node is None:
            continue
        key = property_key(key_node, script)
        if key in INVALID_METADATA_PROPERTIES:
            continue
        if key == "selector":
            metadata.replace("selector", script.text(value_node))
        elif key == "exposes":
            add_exposed_properties(skeleton, parse_exposes(script.text(value_node)))
        else:
            metadata.set(key, metadata_value(value_node, script))
        merged += 1
    return merged

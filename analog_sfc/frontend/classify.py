"""Phase 2: Decide the entity kind and synthesize the class skeleton."""

from __future__ import annotations

import json
import os

from ..backend.util import escape_template_literal, to_class_name, to_file_name
from ..errors import ClassificationError, MissingNameError
from ..ir import ClassSkeleton, Constructor, Decorator, EntityKind, MetadataObject
from .attributes import parse_attributes
from .blocks import Blocks

ANGULAR_CORE = "@angular/core"
CHANGE_DETECTION = "ChangeDetectionStrategy.OnPush"
VIRTUAL_PREFIX = "virtual:"

# template attributes that configure the block rather than the host element
BLOCK_ATTRIBUTES: set[str] = {"lang"}


def component_name(file_path: str) -> str:
    """Base name up to the first dot: `src/app/my-page.page.analog` -> `my-page`."""
    base = file_path.replace("\\", "/").split("/")[-1]
    return base.split(".")[0]


def virtual_template_url(file_path: str) -> str:
    """Virtual module id an external resolver compiles markdown templates for."""
    return VIRTUAL_PREFIX + os.path.splitext(file_path)[0]


def classify(file_path: str, blocks: Blocks) -> EntityKind:
    """Component when there is something to render, Directive for script-only files."""
    if blocks.template or blocks.is_markdown:
        return "Component"
    if blocks.script:
        if "templateUrl" in blocks.script:
            return "Component"
        return "Directive"
    raise ClassificationError("Cannot determine entity type", file_path)


def build_skeleton(file_path: str, blocks: Blocks) -> ClassSkeleton:
    """Build the decorated class the script transformer fills in."""
    name = component_name(file_path)
    if not name:
        raise MissingNameError("Missing component name", file_path)
    file_name = to_file_name(name)
    class_name = to_class_name(name)
    if not class_name:
        raise MissingNameError("Missing component name", file_path)
    kind = classify(file_path, blocks)
    metadata = MetadataObject()
    metadata.set("standalone", "true")
    metadata.set("selector", "'" + file_name + "," + class_name + "'")
    core = [kind]
    if kind == "Component":
        core.append("ChangeDetectionStrategy")
        metadata.set("changeDetection", CHANGE_DETECTION)
        if blocks.is_markdown:
            metadata.set("templateUrl", "`" + virtual_template_url(file_path) + "`")
        elif blocks.template:
            metadata.set("template", "`" + escape_template_literal(blocks.template) + "`")
        if blocks.style:
            style = escape_template_literal(blocks.style.replace("\n", ""))
            metadata.set("styles", "`" + style + "`")
        host = {
            key: value
            for key, value in parse_attributes(blocks.template_attributes).items()
            if key not in BLOCK_ATTRIBUTES
        }
        if host:
            metadata.set("host", json.dumps(host, separators=(",", ":")))
    return ClassSkeleton(
        class_name=class_name,
        file_name=file_name,
        kind=kind,
        entity_name=class_name + "Analog" + kind,
        decorator=Decorator(name=kind, arguments=[metadata]),
        constructor=Constructor(),
        core_imports=["import { " + ", ".join(core) + " } from '" + ANGULAR_CORE + "';"],
    )

"""Phase 1: Split an .analog file into its script, style and template blocks.

The first block of each kind wins; blocks do not nest.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

SCRIPT_TAG_REGEX = re.compile(
    r"<script\s+lang=[\"']ts[\"']\s*>([\s\S]*?)</script>", re.IGNORECASE
)
STYLE_TAG_REGEX = re.compile(r"<style\s*>([\s\S]*?)</style>", re.IGNORECASE)
TEMPLATE_TAG_REGEX = re.compile(
    r"<template(\s+((?:[^>\"']|\"[^\"]*\"|'[^']*')*))?>([\s\S]*?)</template>",
    re.IGNORECASE,
)

MARKDOWN_MARKER = 'lang="md"'


@dataclass
class Blocks:
    """Raw blocks of one file. Empty strings mean the block is absent."""

    script: str
    style: str
    template: str
    template_attributes: str
    is_markdown: bool

    def to_dict(self) -> dict[str, object]:
        return {
            "script": self.script,
            "style": self.style,
            "template": self.template,
            "template_attributes": self.template_attributes,
            "is_markdown": self.is_markdown,
        }


def extract_blocks(file_content: str) -> Blocks:
    """Scan file_content for the three blocks. Never fails."""
    is_markdown = MARKDOWN_MARKER in file_content
    script = ""
    match = SCRIPT_TAG_REGEX.search(file_content)
    if match is not None:
        script = match.group(1).strip()
    style = ""
    match = STYLE_TAG_REGEX.search(file_content)
    if match is not None:
        style = match.group(1).strip()
    template = ""
    attributes = ""
    match = TEMPLATE_TAG_REGEX.search(file_content)
    if match is not None:
        attributes = (match.group(2) or "").strip().replace("\n", "")
        # markdown templates are compiled from the virtual module instead
        if not is_markdown:
            template = match.group(3).strip()
    return Blocks(
        script=script,
        style=style,
        template=template,
        template_attributes=attributes,
        is_markdown=is_markdown,
    )

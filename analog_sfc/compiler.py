"""Compile one .analog file to an Angular component or directive module.

    blocks -> classify (skeleton) -> parse script -> transform -> emit
"""

from __future__ import annotations

import logging

from .backend.typescript import emit_typescript, format_typescript
from .backend.util import collapse_blank_lines
from .frontend.blocks import extract_blocks
from .frontend.classify import build_skeleton
from .frontend.parse import parse_script
from .middleend.transform import Diagnostic, transform_script

logger = logging.getLogger("analog_sfc")


class CompileResult:
    """Generated source plus non-fatal warnings."""

    def __init__(self, code: str, warnings: list[Diagnostic]) -> None:
        self.code: str = code
        self.warnings: list[Diagnostic] = warnings


def _finish(source: str, should_format: bool) -> str:
    source = collapse_blank_lines(source)
    if should_format:
        source = format_typescript(source)
    return source


def compile_file(file_path: str, file_content: str, should_format: bool = False) -> CompileResult:
    """Compile and collect warnings. Raises AnalogError subclasses on failure."""
    blocks = extract_blocks(file_content)
    skeleton = build_skeleton(file_path, blocks)
    if not blocks.script:
        return CompileResult(_finish(emit_typescript(skeleton), should_format), [])
    script = parse_script(blocks.script, file_path)
    result = transform_script(file_path, script, skeleton)
    code = _finish(emit_typescript(result.skeleton), should_format)
    return CompileResult(code, result.warnings())


def compile_analog_file(file_path: str, file_content: str, should_format: bool = False) -> str:
    """Compile file_content; warnings go to the `analog_sfc` logger."""
    result = compile_file(file_path, file_content, should_format)
    for warning in result.warnings:
        logger.warning("%s: %s", file_path, warning)
    return result.code

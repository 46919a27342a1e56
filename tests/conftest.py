"""Pytest configuration for the analog-sfc test suite."""

import sys
from pathlib import Path

import pytest

# Add the repository root to path for analog_sfc imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from analog_sfc.frontend.blocks import Blocks  # noqa: E402
from analog_sfc.frontend.classify import build_skeleton  # noqa: E402
from analog_sfc.frontend.parse import Script, parse_script  # noqa: E402
from analog_sfc.ir import ClassSkeleton  # noqa: E402


def make_blocks(script: str = "", template: str = "", style: str = "") -> Blocks:
    return Blocks(
        script=script,
        style=style,
        template=template,
        template_attributes="",
        is_markdown=False,
    )


@pytest.fixture
def parse():
    """Parse a script block."""

    def _parse(source: str) -> Script:
        return parse_script(source, "test.analog")

    return _parse


@pytest.fixture
def skeleton_for():
    """Build a skeleton for a file with the given blocks."""

    def _skeleton(
        script: str = "", template: str = "<p></p>", path: str = "src/app/demo.analog"
    ) -> ClassSkeleton:
        return build_skeleton(path, make_blocks(script=script, template=template))

    return _skeleton


def contains_normalized(haystack: str, needle: str) -> bool:
    """Check if needle appears in haystack, normalizing line-by-line whitespace."""
    needle_lines = [line.strip() for line in needle.strip().split("\n") if line.strip()]
    haystack_lines = [line.strip() for line in haystack.split("\n") if line.strip()]
    if not needle_lines:
        return True
    for i in range(len(haystack_lines)):
        if haystack_lines[i] == needle_lines[0]:
            match = True
            for j in range(1, len(needle_lines)):
                if (
                    i + j >= len(haystack_lines)
                    or haystack_lines[i + j] != needle_lines[j]
                ):
                    match = False
                    break
            if match:
                return True
    return False

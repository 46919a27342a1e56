"""Tokenize a flat tag attribute string into a key -> value map."""

from __future__ import annotations

import re

ATTRIBUTE_REGEX = re.compile(
    r"""([^\s"'=]+)(?:\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'=<>`]+)))?"""
)


def parse_attributes(attribute_string: str) -> dict[str, str]:
    """Parse `key="value" key2=value2 flag` into a dict.

    Bare attributes map to "". Later duplicates overwrite earlier ones.
    """
    attributes: dict[str, str] = {}
    for match in ATTRIBUTE_REGEX.finditer(attribute_string):
        key = match.group(1).strip()
        value = ""
        for group in (match.group(2), match.group(3), match.group(4)):
            if group is not None:
                value = group
                break
        attributes[key] = value.strip()
    return attributes

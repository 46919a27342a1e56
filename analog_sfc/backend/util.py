"""Shared utilities for the TypeScript emitter: naming, escaping, indentation."""

from __future__ import annotations

import re


def _upper_first(s: str) -> str:
    """Uppercase the first character of a string."""
    return (s[0].upper() + s[1:]) if s else ""


def to_property_name(name: str) -> str:
    """Convert hyphenated (or any separator) text to lowerCamelCase."""
    s = re.sub(
        r"([^a-zA-Z0-9])+(.)?",
        lambda m: m.group(2).upper() if m.group(2) else "",
        name,
    )
    s = re.sub(r"[^a-zA-Z\d]", "", s)
    s = re.sub(r"^([A-Z])", lambda m: m.group(1).lower(), s)
    return re.sub(r"^\d+", "", s)


def to_class_name(name: str) -> str:
    """Convert hyphenated text to UpperCamelCase."""
    return _upper_first(to_property_name(name))


def to_file_name(name: str) -> str:
    """Convert camelCase/PascalCase to lowercase hyphenated."""
    s = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", name).lower()
    s = re.sub(r"(?!^[_])[ _]", "-", s)
    return re.sub(r"^\d+-?", "", s)


def escape_template_literal(value: str) -> str:
    """Escape text for use inside a backtick template literal (without backticks)."""
    return value.replace("\\", "\\\\").replace("`", "\\`").replace("${", "\\${")


def template_literal_lines(text: str) -> set[int]:
    """Return indices of lines that begin inside a template literal.

    Re-indenting those lines would change the literal's value. Regex literals
    are not recognized; a backtick inside one is treated as a template start.
    """
    frozen: set[int] = set()
    # stack entries: "`" for template text, or an int brace depth for ${...}
    stack: list[object] = []
    line = 0
    i = 0
    n = len(text)
    while i < n:
        c = text[i]
        if c == "\n":
            line += 1
            if stack and stack[-1] == "`":
                frozen.add(line)
            i += 1
            continue
        if stack and stack[-1] == "`":
            if c == "\\":
                if i + 1 < n and text[i + 1] == "\n":
                    line += 1
                    frozen.add(line)
                i += 2
            elif c == "`":
                stack.pop()
                i += 1
            elif c == "$" and i + 1 < n and text[i + 1] == "{":
                stack.append(0)
                i += 2
            else:
                i += 1
            continue
        if c == "/" and i + 1 < n and text[i + 1] == "/":
            while i < n and text[i] != "\n":
                i += 1
        elif c == "/" and i + 1 < n and text[i + 1] == "*":
            end = text.find("*/", i + 2)
            end = n if end == -1 else end + 2
            line += text.count("\n", i, end)
            i = end
        elif c == "'" or c == '"':
            i += 1
            while i < n and text[i] != c and text[i] != "\n":
                if text[i] == "\\":
                    i += 1
                    if i < n and text[i] == "\n":
                        line += 1
                        frozen.add(line)
                i += 1
            i += 1
        elif c == "`":
            stack.append("`")
            i += 1
        elif c == "{":
            if stack:
                stack[-1] = stack[-1] + 1  # type: ignore[operator]
            i += 1
        elif c == "}":
            if stack:
                if stack[-1] == 0:
                    stack.pop()
                else:
                    stack[-1] = stack[-1] - 1  # type: ignore[operator]
            i += 1
        else:
            i += 1
    return frozen


def indent_lines(text: str, prefix: str) -> list[str]:
    """Prefix every line of text, except blank lines and template literal content."""
    frozen = template_literal_lines(text)
    result: list[str] = []
    for i, line in enumerate(text.split("\n")):
        if i in frozen or line.strip() == "":
            result.append(line)
        else:
            result.append(prefix + line)
    return result


def collapse_blank_lines(text: str) -> str:
    """Collapse runs of blank lines into a single blank line."""
    return re.sub(r"\n[ \t]*(?:\n[ \t]*)+\n", "\n\n", text)


class Emitter:
    """Base class for code emitters with indentation tracking."""

    def __init__(self, indent_str: str = "  ") -> None:
        self.indent: int = 0
        self.lines: list[str] = []
        self._indent_str = indent_str

    def line(self, text: str = "") -> None:
        """Emit a line with current indentation."""
        if text:
            self.lines.append(self._indent_str * self.indent + text)
        else:
            self.lines.append("")

    def block(self, text: str) -> None:
        """Emit possibly multi-line text at the current indentation."""
        self.lines.extend(indent_lines(text, self._indent_str * self.indent))

    def output(self) -> str:
        """Return the accumulated output as a string."""
        return "\n".join(self.lines)

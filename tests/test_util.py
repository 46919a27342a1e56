"""Naming, escaping and layout helpers."""

from analog_sfc.backend.util import (
    Emitter,
    collapse_blank_lines,
    escape_template_literal,
    indent_lines,
    template_literal_lines,
    to_class_name,
    to_file_name,
    to_property_name,
)


def test_to_class_name():
    assert to_class_name("my-comp") == "MyComp"
    assert to_class_name("counter") == "Counter"
    assert to_class_name("user_profile") == "UserProfile"
    assert to_class_name("2fa-page") == "FaPage"


def test_to_property_name():
    assert to_property_name("my-comp") == "myComp"
    assert to_property_name("MyComp") == "myComp"


def test_to_file_name():
    assert to_file_name("my-comp") == "my-comp"
    assert to_file_name("MyComp") == "my-comp"
    assert to_file_name("userProfile") == "user-profile"
    assert to_file_name("my_comp") == "my-comp"


def test_escape_template_literal():
    assert escape_template_literal("a `b` ${c} \\d") == "a \\`b\\` \\${c} \\\\d"


def test_template_literal_lines():
    text = "const a = `one\ntwo ${x}\nthree`;\nconst b = 1;"
    assert template_literal_lines(text) == {1, 2}


def test_template_literal_lines_ignores_comments_and_strings():
    text = "// `not a template\nconst a = '`';\n/* ` */\nconst b = 2;"
    assert template_literal_lines(text) == set()


def test_template_literal_lines_nested_braces():
    text = "t = `a ${ {k: 1}.k } b\nc`;"
    assert template_literal_lines(text) == {1}


def test_indent_lines_keeps_template_content():
    text = "x = `a\nb`;\nif (y) {\n}"
    assert indent_lines(text, "  ") == ["  x = `a", "b`;", "  if (y) {", "  }"]


def test_indent_lines_skips_blank_lines():
    assert indent_lines("a\n\nb", "    ") == ["    a", "", "    b"]


def test_collapse_blank_lines():
    assert collapse_blank_lines("a\n\n\n\nb\n  \n\t\nc") == "a\n\nb\n\nc"
    assert collapse_blank_lines("a\n\nb") == "a\n\nb"


def test_emitter():
    em = Emitter()
    em.line("class A {")
    em.indent += 1
    em.block("f() {\n  return 1;\n}")
    em.line()
    em.indent -= 1
    em.line("}")
    assert em.output() == "class A {\n  f() {\n    return 1;\n  }\n\n}"

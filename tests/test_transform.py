"""Script transformer and compile pipeline behavior not covered by 02_compile."""

import logging

import pytest

from analog_sfc import compile_analog_file, compile_file
from analog_sfc.backend.typescript import emit_typescript, format_typescript
from analog_sfc.backend.util import collapse_blank_lines
from analog_sfc.errors import MetadataShapeError, ParseError, StructuralError
from analog_sfc.frontend.blocks import extract_blocks
from analog_sfc.frontend.classify import build_skeleton
from analog_sfc.middleend.transform import transform_script


def test_no_script_emits_skeleton():
    source = "<template><p>hi</p></template>"
    expected = collapse_blank_lines(
        emit_typescript(build_skeleton("src/hi.analog", extract_blocks(source)))
    )
    assert compile_file("src/hi.analog", source).code == expected


def test_transform_fills_skeleton(parse, skeleton_for):
    skeleton = skeleton_for(script="const a = 1;")
    result = transform_script("src/app/demo.analog", parse("const a = 1;"), skeleton)
    assert result.skeleton is skeleton
    assert [(p.name, p.initializer) for p in skeleton.properties] == [("a", "1")]
    assert skeleton.constructor.statements == ["const a = this.a;"]
    assert result.warnings() == []


def test_missing_class(parse, skeleton_for):
    skeleton = skeleton_for()
    skeleton.entity_name = "Other"
    with pytest.raises(StructuralError, match="Missing class"):
        transform_script("demo.analog", parse("const a = 1;"), skeleton)


def test_missing_metadata(parse, skeleton_for):
    skeleton = skeleton_for()
    skeleton.decorator = None
    with pytest.raises(StructuralError, match="Missing metadata"):
        transform_script("demo.analog", parse("const a = 1;"), skeleton)


def test_invalid_metadata_arguments(parse, skeleton_for):
    skeleton = skeleton_for()
    skeleton.decorator.arguments = ["{}"]
    with pytest.raises(MetadataShapeError, match="Invalid metadata arguments"):
        transform_script("demo.analog", parse("const a = 1;"), skeleton)


def test_missing_constructor(parse, skeleton_for):
    skeleton = skeleton_for()
    skeleton.constructor = None
    with pytest.raises(StructuralError, match="Invalid constructor body"):
        transform_script("demo.analog", parse("const a = 1;"), skeleton)


def test_warning_location(parse, skeleton_for):
    script = parse("const a = 1;\n\nconst b;")
    result = transform_script("demo.analog", script, skeleton_for())
    assert [repr(w) for w in result.warnings()] == [
        "warning:3:6: [declaration] const variable must have an initializer: b"
    ]


def test_lifecycle_method_added_once(parse, skeleton_for):
    script = parse("onInit(() => a());\nonInit(() => b());")
    skeleton = skeleton_for()
    transform_script("demo.analog", script, skeleton)
    assert [m.name for m in skeleton.methods] == ["ngOnInit"]
    assert skeleton.constructor.statements == [
        "this.onInit = () => a();",
        "this.onInit = () => b();",
    ]


def test_parse_error_location():
    source = '<script lang="ts">\nconst a = 1;\nconst = 2;\n</script><template></template>'
    with pytest.raises(ParseError) as excinfo:
        compile_file("src/bad.analog", source)
    assert excinfo.value.lineno == 2
    assert str(excinfo.value).startswith("src/bad.analog:2:")


def test_compile_analog_file_logs_warnings(caplog):
    source = '<script lang="ts">\nconst a = 1, b = 2;\n</script><template><p></p></template>'
    with caplog.at_level(logging.WARNING, logger="analog_sfc"):
        code = compile_analog_file("src/w.analog", source)
    assert "a = 1;" in code
    assert len(caplog.records) == 1
    assert caplog.records[0].getMessage().startswith("src/w.analog: warning:1:0: [declaration]")


def test_format_strips_trailing_whitespace():
    assert format_typescript("a;   \nb;\t\n\n\n") == "a;\nb;\n"


def test_format_keeps_template_literal_whitespace():
    source = "x = `line  \nend  `;  \n"
    assert format_typescript(source) == "x = `line  \nend  `;\n"


def test_compile_with_format():
    source = '<script lang="ts">\nconst t = `a  \nb`;\n</script><template><p></p></template>'
    code = compile_file("src/f.analog", source, should_format=True).code
    assert "  t = `a  \nb`;\n" in code
    assert code.endswith("}\n")
    assert "\n\n\n" not in code

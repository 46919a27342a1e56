"""CLI tests: run the compiler as a subprocess and check exit codes and streams."""

import json
import subprocess
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).parent.parent

COUNTER = """<script lang="ts">
const count = signal(0);
</script>
<template><p>{{ count() }}</p></template>
"""


def run_cli(args: list[str], stdin: str = "") -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, "-m", "analog_sfc.cli", *args],
        input=stdin,
        capture_output=True,
        text=True,
        cwd=REPO_ROOT,
        timeout=60,
    )


def test_help():
    result = run_cli(["--help"])
    assert result.returncode == 0
    assert "--stop-at PHASE" in result.stdout


def test_compile_stdin():
    result = run_cli(["--filename", "src/app/counter.analog"], COUNTER)
    assert result.returncode == 0, result.stderr
    assert "export default class CounterAnalogComponent {" in result.stdout
    assert "count = signal(0);" in result.stdout
    assert result.stderr == ""


def test_compile_file_to_output(tmp_path: Path):
    src = tmp_path / "my-widget.analog"
    src.write_text(COUNTER)
    out = tmp_path / "my-widget.ts"
    result = run_cli([str(src), "-o", str(out), "--format"])
    assert result.returncode == 0, result.stderr
    assert result.stdout == ""
    code = out.read_text()
    assert "export default class MyWidgetAnalogComponent {" in code
    assert code.endswith("}\n")


def test_stop_at_blocks():
    result = run_cli(["--filename", "counter.analog", "--stop-at", "blocks"], COUNTER)
    assert result.returncode == 0
    blocks = json.loads(result.stdout)
    assert blocks["script"] == "const count = signal(0);"
    assert blocks["template"] == "<p>{{ count() }}</p>"
    assert blocks["is_markdown"] is False


def test_stop_at_classify():
    result = run_cli(["--filename", "counter.analog", "--stop-at", "classify"], COUNTER)
    assert result.returncode == 0
    assert "@Component({" in result.stdout
    assert "constructor() {}" in result.stdout
    assert "signal(0)" not in result.stdout


def test_warnings_go_to_stderr():
    source = '<script lang="ts">\nexport let n = 1;\n</script>\n<template></template>'
    result = run_cli(["--filename", "src/n.analog"], source)
    assert result.returncode == 0
    assert "src/n.analog: warning:1:7: [export] let variable cannot be exported: n" in result.stderr


def test_compile_error():
    result = run_cli(["--filename", "src/empty.analog"], "<p>nothing</p>")
    assert result.returncode == 1
    assert result.stderr.startswith("error: Cannot determine entity type src/empty.analog")
    assert result.stdout == ""


def test_missing_file():
    result = run_cli(["does-not-exist.analog"])
    assert result.returncode == 1
    assert "cannot open 'does-not-exist.analog'" in result.stderr


def test_stdin_requires_filename():
    result = run_cli([], COUNTER)
    assert result.returncode == 2
    assert "--filename is required" in result.stderr


def test_unknown_flag():
    result = run_cli(["--target", "ts"])
    assert result.returncode == 2
    assert "unknown flag '--target'" in result.stderr


def test_unknown_phase():
    result = run_cli(["--filename", "a.analog", "--stop-at", "emit"])
    assert result.returncode == 2
    assert "unknown phase 'emit'" in result.stderr

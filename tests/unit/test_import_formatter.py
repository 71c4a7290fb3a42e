import importlib.util
import subprocess
import sys

import pytest

from rewire.errors import ErrorKind, RewireError
from rewire.formatting import import_formatter
from rewire.formatting.import_formatter import RuffImportFormatter

requires_ruff = pytest.mark.skipif(importlib.util.find_spec("ruff") is None, reason="ruff not installed")


def test_syntax_error_fails_without_running_ruff(monkeypatch):
    def fail_run(*args, **kwargs):
        pytest.fail("ruff must not run on invalid source")

    monkeypatch.setattr(import_formatter.subprocess, "run", fail_run)

    with pytest.raises(RewireError) as exc_info:
        RuffImportFormatter().format_imports("pkg/mod.py", "def broken(:\n")

    assert exc_info.value.kind is ErrorKind.FORMAT
    assert exc_info.value.path == "pkg/mod.py"
    assert "syntax error at line 1" in str(exc_info.value)


def test_null_byte_error_has_no_line_placeholder(monkeypatch):
    monkeypatch.setattr(import_formatter.subprocess, "run", lambda *a, **k: pytest.fail("ruff must not run"))

    with pytest.raises(RewireError) as exc_info:
        RuffImportFormatter().format_imports("nul.py", "x = 1\x00\n")

    assert exc_info.value.kind is ErrorKind.FORMAT
    assert "null bytes" in str(exc_info.value)
    assert "line None" not in str(exc_info.value)


def test_ruff_output_is_returned(monkeypatch):
    calls = []

    def fake_run(cmd, **kwargs):
        calls.append((cmd, kwargs))
        return subprocess.CompletedProcess(cmd, 0, stdout=b"import os\nimport sys\n", stderr=b"")

    monkeypatch.setattr(import_formatter.subprocess, "run", fake_run)

    out = RuffImportFormatter().format_imports("pkg/mod.py", "import sys\nimport os\n")

    assert out == "import os\nimport sys\n"
    cmd, kwargs = calls[0]
    assert cmd[:4] == [sys.executable, "-m", "ruff", "check"]
    assert "--fix-only" in cmd
    assert "--select=I" in cmd
    assert "--stdin-filename=pkg/mod.py" in cmd
    assert cmd[-1] == "-"
    assert kwargs["input"] == b"import sys\nimport os\n"
    assert "text" not in kwargs


def test_line_endings_pass_through_verbatim(monkeypatch):
    def fake_run(cmd, **kwargs):
        return subprocess.CompletedProcess(cmd, 0, stdout=kwargs["input"], stderr=b"")

    monkeypatch.setattr(import_formatter.subprocess, "run", fake_run)

    out = RuffImportFormatter().format_imports("crlf.py", "import os\r\nx = os\r\ny = 1\r")

    assert out == "import os\r\nx = os\r\ny = 1\r"


def test_byte_order_mark_is_accepted(monkeypatch):
    def fake_run(cmd, **kwargs):
        return subprocess.CompletedProcess(cmd, 0, stdout=kwargs["input"], stderr=b"")

    monkeypatch.setattr(import_formatter.subprocess, "run", fake_run)

    out = RuffImportFormatter().format_imports("bom.py", "\ufeffimport os\n")

    assert out == "\ufeffimport os\n"


def test_custom_command_and_rules():
    formatter = RuffImportFormatter(command=["ruff"], select=["I", "F401"])
    cmd = formatter.build_command("a.py")
    assert cmd[:2] == ["ruff", "check"]
    assert "--select=I,F401" in cmd


def test_missing_ruff_is_a_format_error(monkeypatch):
    def missing(cmd, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", cmd[0])

    monkeypatch.setattr(import_formatter.subprocess, "run", missing)

    with pytest.raises(RewireError) as exc_info:
        RuffImportFormatter(command=["ruff"]).format_imports("a.py", "import os\n")

    assert exc_info.value.kind is ErrorKind.FORMAT
    assert "not found" in str(exc_info.value)


def test_nonzero_exit_reports_first_stderr_line(monkeypatch):
    def failing(cmd, **kwargs):
        return subprocess.CompletedProcess(cmd, 2, stdout=b"", stderr=b"ruff failed\nCause: bad config\n")

    monkeypatch.setattr(import_formatter.subprocess, "run", failing)

    with pytest.raises(RewireError) as exc_info:
        RuffImportFormatter().format_imports("a.py", "import os\n")

    assert str(exc_info.value) == "a.py: ruff failed"


@requires_ruff
def test_real_ruff_sorts_imports(tmp_path):
    path = tmp_path / "mod.py"
    source = "import sys\nimport os\n\nprint(os, sys)\n"
    path.write_text(source)

    out = RuffImportFormatter().format_imports(str(path), source)

    assert out == "import os\nimport sys\n\nprint(os, sys)\n"


@requires_ruff
def test_real_ruff_keeps_crlf(tmp_path):
    path = tmp_path / "crlf.py"
    source = "import sys\r\nimport os\r\n\r\nprint(os, sys)\r\n"

    out = RuffImportFormatter().format_imports(str(path), source)

    assert out == "import os\r\nimport sys\r\n\r\nprint(os, sys)\r\n"


@requires_ruff
def test_real_ruff_accepts_bom(tmp_path):
    path = tmp_path / "bom.py"
    source = "\ufeffimport sys\nimport os\n\nprint(os, sys)\n"

    out = RuffImportFormatter().format_imports(str(path), source)

    assert out.lstrip("\ufeff") == "import os\nimport sys\n\nprint(os, sys)\n"

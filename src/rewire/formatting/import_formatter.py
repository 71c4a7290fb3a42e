# src/rewire/formatting/import_formatter.py
# Import-block normalization for rewritten files, delegated to Ruff's isort rules.

import ast
import logging
import subprocess
import sys
from typing import Sequence

from rewire.errors import format_error

logger = logging.getLogger(__name__)

# The ruff installed alongside rewire, whether or not its bin dir is on PATH.
DEFAULT_COMMAND = (sys.executable, "-m", "ruff")
DEFAULT_SELECT = ("I",)


class ImportFormatter:
    """
    Produces canonicalized source for a file. `path` is context only (it lets
    the formatter tell first-party from third-party imports); the content to
    format is always `source`.
    """

    def format_imports(self, path: str, source: str) -> str:
        raise NotImplementedError


class RuffImportFormatter(ImportFormatter):
    """Sorts and groups imports by piping the source through `ruff check --fix-only`."""

    def __init__(self, command: Sequence[str] = DEFAULT_COMMAND, select: Sequence[str] = DEFAULT_SELECT):
        self.command = list(command)
        self.select = list(select)

    def build_command(self, path: str) -> list:
        return self.command + [
            "check",
            "--fix-only",
            "--exit-zero",
            "--no-cache",
            f"--select={','.join(self.select)}",
            f"--stdin-filename={path}",
            "-",
        ]

    def format_imports(self, path: str, source: str) -> str:
        # Bytes throughout: ast strips a BOM only from bytes, and text-mode pipes would rewrite CRLF.
        data = source.encode("utf-8")
        try:
            ast.parse(data, filename=path)
        except SyntaxError as e:
            where = f" at line {e.lineno}" if e.lineno else ""
            raise format_error(path, f"syntax error{where}: {e.msg}") from e
        except ValueError as e:
            raise format_error(path, f"syntax error: {e}") from e

        cmd = self.build_command(path)
        logger.debug("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(cmd, input=data, capture_output=True)
        except FileNotFoundError as e:
            raise format_error(path, f"'{self.command[0]}' command not found; install ruff: pip install ruff") from e
        except OSError as e:
            raise format_error(path, e) from e

        if result.returncode != 0:
            detail = result.stderr.decode("utf-8", errors="replace").strip().splitlines()
            raise format_error(path, detail[0] if detail else f"{' '.join(self.command)} exited with status {result.returncode}")
        try:
            return result.stdout.decode("utf-8")
        except UnicodeDecodeError as e:
            raise format_error(path, f"formatter output is not valid UTF-8: {e.reason}") from e

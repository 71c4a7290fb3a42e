# src/rewire/workflow/pipeline.py
"""
Two-phase run: literal replacement over the tree, then import formatting of
every file the first phase changed.

Replacement tolerates per-file failures. Formatting stops at the first
failure: files formatted before it keep their new content, files after it keep
their post-replacement content. Nothing is rolled back.
"""

import logging
import os
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from rewire.cli.controller import canvas as default_canvas
from rewire.errors import RewireError, format_error, usage_error
from rewire.formatting.import_formatter import ImportFormatter, RuffImportFormatter
from rewire.walker.directory_filter import DEFAULT_FAKE_MARKER, DirectoryFilter
from rewire.walker.file_walker import DEFAULT_SUFFIX, FileWalker, WalkerState
from rewire.walker.replacements import ReplacementSet
from rewire.workflow.file_operations import read_file_bytes, write_file_atomic

logger = logging.getLogger(__name__)


class PipelineState(Enum):
    INIT = "init"
    WALKING = "walking"
    FORMATTING = "formatting"
    DONE = "done"
    FAILED = "failed"


@dataclass
class PipelineResult:
    modified_files: List[str] = field(default_factory=list)
    elapsed: float = 0.0
    file_errors: List[RewireError] = field(default_factory=list)


class Pipeline:
    def __init__(
        self,
        formatter: Optional[ImportFormatter] = None,
        canvas=None,
        suffix: str = DEFAULT_SUFFIX,
        extra_skip_dirs=(),
        fake_marker: str = DEFAULT_FAKE_MARKER,
    ):
        self.formatter = formatter or RuffImportFormatter()
        self.canvas = canvas or default_canvas
        self.suffix = suffix
        self.extra_skip_dirs = tuple(extra_skip_dirs)
        self.fake_marker = fake_marker
        self.state = PipelineState.INIT

    @classmethod
    def from_config(cls, config, formatter: Optional[ImportFormatter] = None, canvas=None) -> "Pipeline":
        if formatter is None:
            formatter = RuffImportFormatter(command=config.formatter.command, select=config.formatter.select)
        return cls(
            formatter=formatter,
            canvas=canvas,
            suffix=config.suffix,
            extra_skip_dirs=config.extra_skip_dirs,
            fake_marker=config.fake_marker,
        )

    def run(self, root, replacements: ReplacementSet, include_fakes: bool = False) -> PipelineResult:
        self.state = PipelineState.INIT
        start = time.perf_counter()
        try:
            self._validate(root, replacements)

            state = WalkerState(replacements=replacements, include_fakes=include_fakes)
            walker = FileWalker(
                state,
                suffix=self.suffix,
                directory_filter=DirectoryFilter(
                    include_fakes=include_fakes,
                    extra_skip_dirs=self.extra_skip_dirs,
                    fake_marker=self.fake_marker,
                ),
                canvas=self.canvas,
            )

            self.state = PipelineState.WALKING
            self.canvas.step("Making replacements")
            modified = walker.walk(root)
            logger.info("Replacement phase modified %d file(s)", len(modified))

            self.state = PipelineState.FORMATTING
            self.canvas.step("Formatting imports")
            self.format_imports(modified)
        except Exception:
            self.state = PipelineState.FAILED
            raise

        elapsed = time.perf_counter() - start
        self.state = PipelineState.DONE
        self.canvas.success(f"Success: {elapsed:.3f}s")
        return PipelineResult(modified_files=list(modified), elapsed=elapsed, file_errors=list(state.errors))

    def _validate(self, root, replacements: ReplacementSet):
        if not replacements:
            raise usage_error("at least one FROM:TO pattern is required")
        if not os.path.exists(root):
            raise usage_error(f"path does not exist: {root}")

    def format_imports(self, paths: List[str]):
        """Format each file in order; the first failure aborts the rest."""
        for path in paths:
            self._format_file(path)

    def _format_file(self, path: str):
        try:
            source = read_file_bytes(path).decode("utf-8")
        except OSError as e:
            raise format_error(path, e.strerror or e) from e
        except UnicodeDecodeError as e:
            raise format_error(path, f"not valid UTF-8: {e.reason}") from e

        formatted = self.formatter.format_imports(path, source)
        if formatted == source:
            logger.debug("Imports already canonical in %s", path)

        try:
            write_file_atomic(path, formatted.encode("utf-8"))
        except OSError as e:
            raise format_error(path, e.strerror or e) from e

# src/rewire/walker/file_walker.py
"""
Tree traversal and the per-file replace step.

The walk is best effort per file: a file that cannot be read or written is
reported and skipped. Failing to list a directory aborts the whole walk.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional

from rewire.cli.controller import canvas as default_canvas
from rewire.errors import RewireError, per_file_error, traversal_error
from rewire.walker.directory_filter import DirectoryFilter
from rewire.walker.replacements import ReplacementSet
from rewire.workflow.file_operations import read_file_bytes, write_file_atomic

logger = logging.getLogger(__name__)

DEFAULT_SUFFIX = ".py"


@dataclass
class WalkerState:
    replacements: ReplacementSet
    include_fakes: bool = False
    modified: List[str] = field(default_factory=list)   # traversal order, append-only
    errors: List[RewireError] = field(default_factory=list)


class FileWalker:
    def __init__(
        self,
        state: WalkerState,
        suffix: str = DEFAULT_SUFFIX,
        directory_filter: Optional[DirectoryFilter] = None,
        canvas=None,
    ):
        self.state = state
        self.suffix = suffix
        self.directory_filter = directory_filter or DirectoryFilter(include_fakes=state.include_fakes)
        self.canvas = canvas or default_canvas

    def walk(self, root) -> List[str]:
        """
        Walk `root` depth first in lexical order and rewrite every matching
        file. Returns the modified paths in the order they were changed.
        """
        root = os.fspath(root)
        try:
            is_dir = os.path.isdir(root)
            if not is_dir:
                os.lstat(root)
        except OSError as e:
            raise traversal_error(root, e) from e

        if is_dir:
            self._walk_dir(root)
        else:
            self._visit_file(root, os.path.basename(root))
        return self.state.modified

    def _walk_dir(self, dirpath: str):
        try:
            with os.scandir(dirpath) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            raise traversal_error(dirpath, e) from e

        for entry in entries:
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError as e:
                raise traversal_error(entry.path, e) from e
            if is_dir:
                if self.directory_filter.should_skip(entry.name):
                    logger.debug("Skipping directory %s", entry.path)
                    continue
                self._walk_dir(entry.path)
            else:
                self._visit_file(entry.path, entry.name)

    def _visit_file(self, path: str, name: str):
        if not name.endswith(self.suffix):
            return
        try:
            self.replace(path)
        except OSError as e:
            cause = e.strerror or e
            self.state.errors.append(per_file_error(path, cause))
            logger.debug("Replace failed for %s: %s", path, cause)
            self.canvas.diagnostic(path, cause)

    def replace(self, path) -> bool:
        """
        Apply every pattern to one file. Files without a match are left
        untouched and are not recorded.
        """
        content = read_file_bytes(path)
        if not self.state.replacements.contains_any(content):
            logger.debug("No match in %s", path)
            return False
        write_file_atomic(path, self.state.replacements.apply_all(content))
        self.state.modified.append(str(path))
        logger.info("Modified %s", path)
        return True

# src/rewire/walker/directory_filter.py
# Decides which directories the walker descends into.

from typing import Iterable

ALWAYS_SKIPPED = frozenset({".git", "vendor"})
DEFAULT_FAKE_MARKER = "fake"


class DirectoryFilter:
    def __init__(
        self,
        include_fakes: bool = False,
        extra_skip_dirs: Iterable[str] = (),
        fake_marker: str = DEFAULT_FAKE_MARKER,
    ):
        self.include_fakes = include_fakes
        self.skipped_names = ALWAYS_SKIPPED | frozenset(extra_skip_dirs)
        self.fake_marker = fake_marker

    def should_skip(self, dir_name: str) -> bool:
        """True if the directory and everything below it must be pruned."""
        if dir_name in self.skipped_names:
            return True
        if not self.include_fakes and self.fake_marker and self.fake_marker in dir_name:
            return True
        return False

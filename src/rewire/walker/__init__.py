from rewire.walker.directory_filter import DirectoryFilter
from rewire.walker.file_walker import FileWalker, WalkerState
from rewire.walker.replacements import Replacement, ReplacementSet, parse_pattern

__all__ = ["DirectoryFilter", "FileWalker", "WalkerState", "Replacement", "ReplacementSet", "parse_pattern"]

# Handles reading and atomically rewriting files for both pipeline phases.

import logging
import os
import shutil
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


def read_file_bytes(path) -> bytes:
    with open(path, "rb") as f:
        return f.read()


def write_file_atomic(path, content: bytes):
    """
    Replace `path` with `content` so readers see either the old or the new
    file, never a partial one.

    The data goes to a temporary file in the same directory which is then
    renamed over the target. Symlinks are written through to their target.
    """
    target = Path(os.path.realpath(path))
    temp_file_obj = tempfile.NamedTemporaryFile(
        mode="wb", dir=target.parent, prefix=f".{target.name}.", suffix=".tmp", delete=False
    )
    temp_filepath = temp_file_obj.name
    try:
        with temp_file_obj as temp_file:
            temp_file.write(content)
            temp_file.flush()
            os.fsync(temp_file.fileno())
        if target.exists():
            shutil.copymode(target, temp_filepath)
        os.replace(temp_filepath, target)
    except BaseException:
        try:
            os.remove(temp_filepath)
        except OSError as rm_err:
            logger.warning("Could not remove temp file %s: %s", temp_filepath, rm_err)
        raise
    logger.debug("Wrote %d bytes to %s", len(content), target)

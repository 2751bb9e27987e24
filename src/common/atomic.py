"""All-or-nothing file replacement."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Union

from errors import OutputError

logger = logging.getLogger(__name__)


def atomic_write_text(path: Union[str, Path], text: str) -> Path:
    """Replace ``path`` with ``text`` (UTF-8) so readers see old or new content only.

    The data goes to a temporary file in the destination directory, which is
    then renamed over the target.

    Raises:
        OutputError: If the directory is unwritable or the rename fails.
    """
    target = Path(path)
    try:
        fd, tmp_path = tempfile.mkstemp(
            prefix=f".{target.name}.", suffix=".tmp", dir=str(target.parent)
        )
    except OSError as exc:
        raise OutputError(f"failed to write {target}: {exc}") from exc

    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        # mkstemp creates 0600; keep the mode of the file being replaced
        try:
            mode = os.stat(target).st_mode & 0o777
        except FileNotFoundError:
            mode = 0o644
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, target)
    except OSError as exc:
        try:
            os.unlink(tmp_path)
        except FileNotFoundError:
            pass
        raise OutputError(f"failed to write {target}: {exc}") from exc

    logger.debug("Wrote %s (%d bytes)", target, len(text.encode("utf-8")))
    return target

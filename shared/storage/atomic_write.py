"""
Atomic file replacement
Write to a sibling temporary file, then rename over the target
"""

import logging
import os
import stat
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


def write_bytes_atomic(path: Path, payload: bytes) -> Path:
    """
    Atomically replace ``path`` with ``payload``.

    Readers see either the previous file or the complete new one, never a
    partial write. The temporary file lives in the target directory so the
    final rename stays on one filesystem.
    """
    resolved = Path(path).expanduser()
    resolved.parent.mkdir(parents=True, exist_ok=True)

    with tempfile.NamedTemporaryFile(
        "wb", dir=str(resolved.parent), prefix=f".{resolved.name}.", suffix=".tmp", delete=False
    ) as handle:
        temp_path = Path(handle.name)
        try:
            handle.write(payload)
            handle.flush()
            os.fsync(handle.fileno())
        except BaseException:
            handle.close()
            temp_path.unlink()
            raise

    try:
        if resolved.exists():
            os.chmod(temp_path, stat.S_IMODE(resolved.stat().st_mode))
        temp_path.replace(resolved)
    except BaseException:
        temp_path.unlink()
        raise

    logger.debug(f"Wrote {len(payload)} bytes to {resolved}")
    return resolved

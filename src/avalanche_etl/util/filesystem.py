"""
Atomic JSON output for the finished FeatureCollection.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from filelock import FileLock

logger = logging.getLogger(__name__)


def write_json_atomic(path: Path | str, payload: Any) -> Path:
    """
    Serialise ``payload`` to ``path`` so readers never see a half-written file.

    A ``<name>.lock`` file next to the target serialises concurrent runs; the
    JSON is staged in a temp file in the same directory and renamed over the
    target.
    """
    target = Path(path).expanduser().resolve()
    target.parent.mkdir(parents=True, exist_ok=True)
    text = json.dumps(payload, indent=2, ensure_ascii=False) + "\n"

    with FileLock(str(target.with_suffix(f"{target.suffix}.lock"))):
        fd, staged = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(text)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(staged, target)
        except BaseException:
            Path(staged).unlink(missing_ok=True)
            raise
    logger.debug("Replaced %s (%d bytes)", target, len(text))
    return target

"""
sqlite_store.db.paths

Recursive directory provisioning for the database file.

Responsibilities:
- Create missing ancestor directories, outermost first.
- Bound the upward recursion so malformed paths cannot recurse forever.
"""

from __future__ import annotations

import asyncio
import os
from pathlib import Path

import structlog

from sqlite_store.errors import IOFailure
from sqlite_store.observability.logging import get_logger

DEFAULT_MAX_DEPTH = 32

log = get_logger(__name__)


async def ensure_dir(
    path: str | os.PathLike[str],
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    logger: structlog.stdlib.BoundLogger | None = None,
) -> list[Path]:
    """
    Make sure `path` exists as a directory, creating missing ancestors first.

    Returns the directories created, in creation order; an existing `path`
    is a no-op and returns ``[]``. Raises `IOFailure` on the first failure,
    before any further directory is created.
    """

    created: list[Path] = []
    await _ensure(
        Path(os.path.abspath(path)),
        depth=0,
        max_depth=max_depth,
        created=created,
        logger=logger or log,
    )
    return created


async def _ensure(
    path: Path,
    *,
    depth: int,
    max_depth: int,
    created: list[Path],
    logger: structlog.stdlib.BoundLogger,
) -> None:
    if await _exists(path):
        return
    if depth >= max_depth:
        raise IOFailure(f"more than {max_depth} missing directories above {path}")
    parent = path.parent
    if parent == path:
        raise IOFailure(f"filesystem root {path} does not exist")

    await _ensure(parent, depth=depth + 1, max_depth=max_depth, created=created, logger=logger)

    logger.debug("store.mkdir", path=str(path))
    try:
        await asyncio.to_thread(path.mkdir)
    except FileExistsError:
        # Created concurrently between the check and mkdir; fine if it is a directory.
        if not await asyncio.to_thread(path.is_dir):
            raise IOFailure(f"{path} exists and is not a directory") from None
        return
    except OSError as e:
        raise IOFailure(f"cannot create directory {path}: {e}") from e
    created.append(path)


async def _exists(path: Path) -> bool:
    # Only "not found" means absent; permission errors etc. must surface.
    try:
        await asyncio.to_thread(path.stat)
    except FileNotFoundError:
        return False
    except OSError as e:
        raise IOFailure(f"cannot stat {path}: {e}") from e
    return True


# --- Module Notes -----------------------------------------------------------
# Provisioning runs once per store at startup; concurrent provisioning of
# overlapping paths is tolerated only to the extent handled above.

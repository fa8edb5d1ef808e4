from __future__ import annotations

import logging

import psutil

logger = logging.getLogger(__name__)


def descendant_pids() -> set[int]:
    try:
        return {child.pid for child in psutil.Process().children(recursive=True)}
    except psutil.Error:
        return set()


def spawned_since(before: set[int]) -> list[psutil.Process]:
    """Descendants of this process that did not exist in `before`."""
    try:
        children = psutil.Process().children(recursive=True)
    except psutil.Error:
        return []
    return [child for child in children if child.pid not in before]


def alive(processes: list[psutil.Process]) -> list[psutil.Process]:
    result = []
    for proc in processes:
        try:
            if proc.is_running() and proc.status() != psutil.STATUS_ZOMBIE:
                result.append(proc)
        except psutil.NoSuchProcess:
            continue
    return result


def reap(processes: list[psutil.Process], timeout: float = 5.0) -> list[psutil.Process]:
    """Wait for `processes` to exit, killing whatever outlives `timeout`.

    Returns the processes that had to be killed.
    """
    if not processes:
        return []
    _, survivors = psutil.wait_procs(processes, timeout=timeout)
    for proc in survivors:
        try:
            proc.kill()
        except psutil.NoSuchProcess:
            continue
    if survivors:
        psutil.wait_procs(survivors, timeout=timeout)
        logger.warning(
            "Killed %d browser processes that outlived close: %s",
            len(survivors),
            [proc.pid for proc in survivors],
        )
    return survivors

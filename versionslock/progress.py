"""Stage progress for write and verify runs.

Interactive terminals get a transient Rich progress bar that steps through
the stages ("Loading resolution snapshot", "Computing lock state", ...).
Anywhere else (CI, redirected output) each stage is logged at STATUS level.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Callable, Iterator, List, Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)

if TYPE_CHECKING:
    from logging import Logger

AdvanceStageFunc = Callable[..., None]


def is_interactive_terminal() -> bool:
    """Return True if output goes to an interactive terminal."""
    return Console().is_terminal


def _stage_advancer(stages: List[str], show: Callable[[int, str], None]) -> AdvanceStageFunc:
    """Call ``show(index, description)`` for each stage after the first; extra calls are ignored."""
    current = 0

    def advance_stage(stage_name: Optional[str] = None) -> None:
        nonlocal current
        current += 1
        if current < len(stages):
            show(current, stage_name or stages[current])

    return advance_stage


@contextmanager
def create_stage_progress(
    stages: List[str],
    logger: Optional["Logger"] = None,
    transient: bool = True,
) -> Iterator[AdvanceStageFunc]:
    """Context manager for multi-stage lock operations.

    Args:
        stages: Stage names, in order. The first stage starts on entry.
        logger: Receives the stage messages when not attached to a terminal.
        transient: Clear the progress bar when the block exits.

    Yields:
        advance_stage(stage_name=None): moves to the next stage, optionally
        overriding its description.
    """
    if not stages:
        yield lambda stage_name=None: None
        return

    if not is_interactive_terminal():
        def log_stage(index: int, description: str) -> None:
            if logger is not None:
                logger.status(f"Stage {index + 1}/{len(stages)}: {description}...")

        log_stage(0, stages[0])
        yield _stage_advancer(stages, log_stage)
        return

    progress = Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
        TimeElapsedColumn(),
        transient=transient,
    )
    try:
        progress.start()
        task_id = progress.add_task(stages[0], total=len(stages), completed=1)
        yield _stage_advancer(
            stages, lambda index, description: progress.update(task_id, advance=1, description=description)
        )
    finally:
        progress.stop()


__all__ = [
    "is_interactive_terminal",
    "create_stage_progress",
]

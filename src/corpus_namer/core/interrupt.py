"""Signal handling that rolls back the active transaction.

While ``interruption_guard`` is active, SIGINT and SIGTERM replay the undo
log of the guarded mutator synchronously on the main thread and then exit
with status 1. Previous handlers are restored when the block exits.
"""

from __future__ import annotations

import signal
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from types import FrameType
from typing import TYPE_CHECKING, Any

from corpus_namer.utils.debug import debug

if TYPE_CHECKING:  # pragma: no cover - typing only
    from corpus_namer.chains.mutator import TransactionalMutator

DEFAULT_SIGNALS: tuple[signal.Signals, ...] = (signal.SIGINT, signal.SIGTERM)


def make_handler(mutator: TransactionalMutator) -> Any:
    """Build a signal handler bound to one mutator.

    The handler is reentrant: a signal that arrives while a rollback is
    already replaying is ignored so the replay can finish.
    """

    def _handler(signum: int, frame: FrameType | None) -> None:
        if mutator.rollback_in_progress:
            debug(f"Ignoring signal {signum} during rollback")
            return
        name = signal.Signals(signum).name
        mutator.abort(reason=f"signal {name}")
        raise SystemExit(1)

    return _handler


@contextmanager
def interruption_guard(
    mutator: TransactionalMutator,
    signals: tuple[signal.Signals, ...] = DEFAULT_SIGNALS,
) -> Iterator[TransactionalMutator]:
    """Install rollback-on-signal handlers for the duration of the block.

    Outside the main thread signal handlers cannot be installed; the block
    then relies on the mutator's own rollback of KeyboardInterrupt/SystemExit.
    """
    if threading.current_thread() is not threading.main_thread():
        yield mutator
        return

    handler = make_handler(mutator)
    previous = {sig: signal.signal(sig, handler) for sig in signals}
    try:
        yield mutator
    finally:
        for sig, old in previous.items():
            signal.signal(sig, old if old is not None else signal.SIG_DFL)

from __future__ import annotations

import logging
import threading
from typing import Any, Callable


logger = logging.getLogger(__name__)


def run_in_thread(
    fn: Callable[[], Any],
    on_done: Callable[[Any], None] | None = None,
    on_error: Callable[[Exception], None] | None = None,
) -> threading.Thread:
    def _runner():
        try:
            result = fn()
        except Exception as e:  # noqa: BLE001
            if on_error:
                on_error(e)
            else:
                logger.exception("background task failed")
            return
        if on_done:
            on_done(result)

    t = threading.Thread(target=_runner, daemon=True)
    t.start()
    return t

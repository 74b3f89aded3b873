"""Cooperative cancellation for long running comparisons."""
from __future__ import annotations

import threading

from ..errors import Cancelled


class CancelToken:
    """Flag shared between a caller and a running comparison.

    The differ polls the token between cell rows; once :meth:`cancel` has been
    called the comparison stops with :class:`~pagediff.errors.Cancelled`.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise Cancelled("Comparison cancelled")

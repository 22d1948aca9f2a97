"""
Monotonic generation counter used to detect stale asynchronous results.
"""


class Generation:
    """A per-owner request token.

    Every new request calls ``advance()`` and keeps the returned token; before
    mutating state with the result of an awaited call it checks
    ``is_current(token)``. In-flight work is never aborted, only its effect.
    """

    def __init__(self):
        self._current = 0

    @property
    def current(self) -> int:
        return self._current

    def advance(self) -> int:
        """Start a new generation and return its token."""
        self._current += 1
        return self._current

    def is_current(self, token: int) -> bool:
        return token == self._current

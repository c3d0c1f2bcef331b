from typing import Optional
from loguru import logger


class CancellationToken:
    """Marks the end of the component that started a request.

    Store actions check the token once the response arrives and skip their
    state reconciliation when it has been cancelled.
    """

    def __init__(self, owner: str = "component"):
        self.owner = owner
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self):
        if not self._cancelled:
            self._cancelled = True
            logger.debug(f"Cancelled pending requests of {self.owner}")


def is_cancelled(token: Optional[CancellationToken]) -> bool:
    return token is not None and token.cancelled

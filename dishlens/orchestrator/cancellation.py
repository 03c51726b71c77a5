import asyncio

from dishlens.orchestrator.errors import RequestCancelled


class CancellationToken:
    """One per identification request. The controller cancels, the transport observes."""

    def __init__(self):
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self):
        self._event.set()

    def raise_if_cancelled(self):
        if self._event.is_set():
            raise RequestCancelled()

    async def wait(self):
        await self._event.wait()

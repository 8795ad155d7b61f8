"""Data loader state machine: pending / success / failure with refetch."""

import asyncio
import logging
from collections.abc import Callable
from typing import Optional, Protocol

from pydantic import BaseModel, ConfigDict, Field

from vuce_dashboard.errors import LoadError
from vuce_dashboard.models.row import CanonicalRow

logger = logging.getLogger(__name__)

UNKNOWN_ERROR = "Error desconocido al cargar datos"


class RowSource(Protocol):
    async def fetch_all(self) -> list[CanonicalRow]: ...


class LoadState(BaseModel):
    """Snapshot exposed to rendering collaborators."""

    model_config = ConfigDict(frozen=True)

    data: list[CanonicalRow] = Field(default_factory=list)
    loading: bool = False
    error: Optional[str] = None


Listener = Callable[[LoadState], None]


class DataLoader:
    """
    Loads canonical rows and publishes LoadState snapshots.

    While a request is pending the previous rows stay visible and the error
    is cleared. Success replaces the rows; failure empties them and sets a
    readable error. When calls overlap only the most recent one publishes,
    so a slow stale response cannot overwrite fresher state.
    A cancelled load (for example under asyncio.wait_for) ends the pending
    state, keeps the previous rows and re-raises.
    """

    def __init__(self, source: RowSource):
        self._source = source
        self._state = LoadState()
        self._generation = 0
        self._listeners: list[Listener] = []

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def data(self) -> list[CanonicalRow]:
        return self._state.data

    @property
    def loading(self) -> bool:
        return self._state.loading

    @property
    def error(self) -> Optional[str]:
        return self._state.error

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call listener on every published state; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, state: LoadState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    async def refetch(self) -> LoadState:
        """Run one load cycle and return the state it ended in."""
        self._generation += 1
        generation = self._generation
        self._publish(LoadState(data=self._state.data, loading=True, error=None))

        try:
            rows = await self._source.fetch_all()
        except asyncio.CancelledError:
            if generation == self._generation:
                logger.debug("Load cancelled (generation %d)", generation)
                self._publish(LoadState(data=self._state.data, loading=False, error=self._state.error))
            raise
        except LoadError as e:
            outcome = LoadState(data=[], loading=False, error=str(e))
        except Exception:
            logger.exception("Unexpected failure while loading rows")
            outcome = LoadState(data=[], loading=False, error=UNKNOWN_ERROR)
        else:
            outcome = LoadState(data=rows, loading=False, error=None)

        if generation != self._generation:
            logger.debug("Discarding stale load result (generation %d, current %d)", generation, self._generation)
            return self._state

        self._publish(outcome)
        return outcome

    load = refetch

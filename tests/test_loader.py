"""Unit tests for the DataLoader state machine."""

import asyncio

import httpx

from vuce_dashboard.connectors import WebhookConnector
from vuce_dashboard.errors import NetworkError, TransportError
from vuce_dashboard.loader import UNKNOWN_ERROR, DataLoader, LoadState
from vuce_dashboard.models.row import CanonicalRow
from vuce_dashboard.settings import LoaderSettings

ROW_A = CanonicalRow(record_id="CALC001", greq=1001)
ROW_B = CanonicalRow(record_id="CALC002", greq=1002)


class StubSource:
    """Returns queued outcomes; exceptions are raised."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = 0

    async def fetch_all(self) -> list[CanonicalRow]:
        self.calls += 1
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class TestDataLoaderStates:
    """Tests for pending / success / failure transitions."""

    def test_initial_state(self) -> None:
        loader = DataLoader(StubSource())
        assert loader.data == []
        assert loader.loading is False
        assert loader.error is None

    def test_success(self) -> None:
        loader = DataLoader(StubSource([ROW_A]))
        state = asyncio.run(loader.refetch())
        assert state == LoadState(data=[ROW_A], loading=False, error=None)
        assert loader.state == state

    def test_loading_true_then_false(self) -> None:
        """Listeners see the pending state before the final one."""
        loader = DataLoader(StubSource([ROW_A]))
        seen: list[LoadState] = []
        loader.subscribe(seen.append)
        asyncio.run(loader.load())
        assert [s.loading for s in seen] == [True, False]
        assert seen[-1].data == [ROW_A]

    def test_transport_failure(self) -> None:
        loader = DataLoader(StubSource(TransportError(500, "Internal Server Error")))
        state = asyncio.run(loader.refetch())
        assert state.error == "Error fetching data: Internal Server Error"
        assert state.loading is False
        assert state.data == []

    def test_network_failure(self) -> None:
        loader = DataLoader(StubSource(NetworkError("Network error")))
        assert asyncio.run(loader.refetch()).error == "Network error"

    def test_unexpected_exception(self) -> None:
        loader = DataLoader(StubSource(RuntimeError("boom")))
        assert asyncio.run(loader.refetch()).error == UNKNOWN_ERROR

    def test_failure_clears_previous_data(self) -> None:
        loader = DataLoader(StubSource([ROW_A], TransportError(503, "Service Unavailable")))
        asyncio.run(loader.refetch())
        state = asyncio.run(loader.refetch())
        assert state.data == []
        assert state.error == "Error fetching data: Service Unavailable"

    def test_pending_keeps_previous_data(self) -> None:
        loader = DataLoader(StubSource([ROW_A], [ROW_A, ROW_B]))
        asyncio.run(loader.refetch())
        seen: list[LoadState] = []
        loader.subscribe(seen.append)
        asyncio.run(loader.refetch())
        assert seen[0] == LoadState(data=[ROW_A], loading=True, error=None)
        assert seen[1].data == [ROW_A, ROW_B]


class TestDataLoaderRefetch:
    """Tests for refetch behavior."""

    def test_refetch_replaces_data(self) -> None:
        source = StubSource([ROW_A], [ROW_A, ROW_B])
        loader = DataLoader(source)
        asyncio.run(loader.refetch())
        assert loader.data == [ROW_A]
        asyncio.run(loader.refetch())
        assert loader.data == [ROW_A, ROW_B]
        assert source.calls == 2

    def test_success_after_failure_clears_error(self) -> None:
        loader = DataLoader(StubSource(NetworkError("Initial error"), [ROW_A]))
        asyncio.run(loader.refetch())
        assert loader.error == "Initial error"
        asyncio.run(loader.refetch())
        assert loader.error is None
        assert loader.data == [ROW_A]
        assert loader.loading is False

    def test_unsubscribe(self) -> None:
        loader = DataLoader(StubSource([ROW_A], [ROW_B]))
        seen: list[LoadState] = []
        unsubscribe = loader.subscribe(seen.append)
        asyncio.run(loader.refetch())
        unsubscribe()
        asyncio.run(loader.refetch())
        assert len(seen) == 2

    def test_stale_response_discarded(self) -> None:
        """An older request finishing last does not overwrite newer state."""

        class SlowThenFast:
            def __init__(self) -> None:
                self.release_slow = asyncio.Event()
                self.calls = 0

            async def fetch_all(self) -> list[CanonicalRow]:
                self.calls += 1
                if self.calls == 1:
                    await self.release_slow.wait()
                    return [ROW_A]
                return [ROW_B]

        async def scenario() -> tuple[LoadState, LoadState, LoadState]:
            source = SlowThenFast()
            loader = DataLoader(source)
            slow = asyncio.create_task(loader.refetch())
            await asyncio.sleep(0)
            fresh = await loader.refetch()
            source.release_slow.set()
            stale = await slow
            return fresh, stale, loader.state

        fresh, stale, final = asyncio.run(scenario())
        assert fresh.data == [ROW_B]
        assert final.data == [ROW_B]
        assert stale == final
        assert final.loading is False


class TestDataLoaderWithConnector:
    """End-to-end: loader over the webhook connector with a mocked transport."""

    def test_http_500_surfaces_error(self, webhook_settings: LoaderSettings, mock_client_factory) -> None:
        connector = WebhookConnector(webhook_settings, client=mock_client_factory(lambda r: httpx.Response(500)))
        loader = DataLoader(connector)
        seen: list[bool] = []
        loader.subscribe(lambda s: seen.append(s.loading))

        state = asyncio.run(loader.refetch())

        assert seen == [True, False]
        assert state.error == "Error fetching data: Internal Server Error"
        assert state.data == []


class TestDataLoaderCancellation:
    """Tests for loads cancelled by a caller-side timeout."""

    def test_timeout_ends_pending_state(self) -> None:
        """A timed-out load stops loading and keeps the rows it had."""

        class Hanging:
            def __init__(self) -> None:
                self.calls = 0

            async def fetch_all(self) -> list[CanonicalRow]:
                self.calls += 1
                if self.calls == 1:
                    return [ROW_A]
                await asyncio.sleep(10)
                return [ROW_B]

        async def scenario() -> DataLoader:
            loader = DataLoader(Hanging())
            await loader.refetch()
            try:
                await asyncio.wait_for(loader.refetch(), 0.05)
            except asyncio.TimeoutError:
                pass
            else:
                raise AssertionError("refetch should have timed out")
            return loader

        loader = asyncio.run(scenario())
        assert loader.loading is False
        assert loader.data == [ROW_A]
        assert loader.error is None

    def test_cancelled_load_notifies_listeners(self) -> None:
        seen: list[bool] = []

        class Never:
            async def fetch_all(self) -> list[CanonicalRow]:
                await asyncio.Event().wait()
                return []

        async def scenario() -> None:
            loader = DataLoader(Never())
            loader.subscribe(lambda s: seen.append(s.loading))
            task = asyncio.create_task(loader.refetch())
            await asyncio.sleep(0)
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

        asyncio.run(scenario())
        assert seen == [True, False]

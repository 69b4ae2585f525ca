"""Tests for the periodic refresh task and the polling boards."""

import asyncio

import httpx
import pytest
from parking_app.client.lot_board import EnforcementBoard, LotBoard
from parking_app.client.poller import PeriodicTask

LOTS = [
    {"lotID": "near", "title": "Near", "capacity": 40, "scanCount": 38,
     "location": "41.7431,-74.0806", "allows": {"commuter": True}},
    {"lotID": "far", "title": "Far", "capacity": 40, "scanCount": 0,
     "location": "41.7530,-74.0806", "allows": {"commuter": True}},
    {"lotID": "staff", "title": "Staff", "capacity": 40, "scanCount": 0,
     "location": "41.7431,-74.0806", "allows": {"facstaff": True}},
]


def make_client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://test")


class TestPeriodicTask:
    @pytest.mark.asyncio
    async def test_runs_immediately_and_stops(self):
        calls = []

        async def refresh():
            calls.append(1)

        task = PeriodicTask(refresh, interval=60)
        task.start()
        await asyncio.sleep(0.05)
        assert calls == [1]
        assert task.running

        await task.stop()
        assert not task.running

    @pytest.mark.asyncio
    async def test_repeats_on_interval(self):
        calls = []

        async def refresh():
            calls.append(1)

        task = PeriodicTask(refresh, interval=0.01)
        task.start()
        await asyncio.sleep(0.1)
        await task.stop()
        assert len(calls) >= 3

    @pytest.mark.asyncio
    async def test_trigger_refreshes_now(self):
        calls = []

        async def refresh():
            calls.append(1)

        task = PeriodicTask(refresh, interval=60)
        task.start()
        await asyncio.sleep(0.05)
        task.trigger()
        await asyncio.sleep(0.05)
        await task.stop()
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_failure_does_not_stop_loop(self):
        calls = []

        async def refresh():
            calls.append(1)
            if len(calls) == 1:
                raise RuntimeError("boom")

        task = PeriodicTask(refresh, interval=0.01)
        task.start()
        await asyncio.sleep(0.1)
        assert task.running
        await task.stop()
        assert len(calls) >= 2

    @pytest.mark.asyncio
    async def test_stop_before_start_is_noop(self):
        async def refresh():
            pass

        await PeriodicTask(refresh, interval=1).stop()


class TestLotBoard:
    @pytest.mark.asyncio
    async def test_refresh_filters_and_ranks(self):
        async with make_client(lambda request: httpx.Response(200, json=LOTS)) as client:
            board = LotBoard(client, permit="commuter", sort_mode="distance")
            await board.refresh()

        assert board.loading is False
        assert board.error is None
        assert [lot.lot_id for lot in board.lots] == ["near", "far"]

    @pytest.mark.asyncio
    async def test_configure_reranks_without_fetch(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json=LOTS)

        async with make_client(handler) as client:
            board = LotBoard(client, sort_mode="distance")
            await board.refresh()
            board.configure(sort_mode="spots")
            assert [lot.lot_id for lot in board.lots] == ["far", "near"]
            board.configure(permit="facstaff")
            assert [lot.lot_id for lot in board.lots] == ["staff"]

        assert len(requests) == 1

    @pytest.mark.asyncio
    async def test_bad_lot_record_does_not_hide_the_rest(self):
        bad = dict(LOTS[0], lotID="broken", scanCount="x")
        seen = []
        async with make_client(lambda request: httpx.Response(200, json=LOTS + [bad])) as client:
            board = LotBoard(client, sort_mode="distance", on_update=seen.append)
            await board.refresh()

        assert board.error is None
        assert [lot.lot_id for lot in board.lots] == ["near", "far"]
        assert seen == [board]

    @pytest.mark.asyncio
    async def test_failed_fetch_keeps_previous_lots(self):
        responses = [httpx.Response(200, json=LOTS), httpx.Response(500, json={"error": "down"})]

        async with make_client(lambda request: responses.pop(0)) as client:
            board = LotBoard(client, sort_mode="distance")
            await board.refresh()
            await board.refresh()

        assert board.error == "Failed to load lots"
        assert [lot.lot_id for lot in board.lots] == ["near", "far"]

    @pytest.mark.asyncio
    async def test_non_list_body_is_an_error(self):
        async with make_client(lambda request: httpx.Response(200, json={"error": "x"})) as client:
            board = LotBoard(client)
            await board.refresh()

        assert board.error == "Failed to load lots"
        assert board.lots == []

    @pytest.mark.asyncio
    async def test_on_update_called(self):
        seen = []
        async with make_client(lambda request: httpx.Response(200, json=LOTS)) as client:
            board = LotBoard(client, on_update=seen.append)
            await board.refresh()
        assert seen == [board]

    def test_rejects_unknown_settings(self):
        client = make_client(lambda request: httpx.Response(200, json=[]))
        with pytest.raises(ValueError):
            LotBoard(client, permit="faculty")
        with pytest.raises(ValueError):
            LotBoard(client, building="gym")
        board = LotBoard(client)
        with pytest.raises(ValueError):
            board.configure(sort_mode="random")


class TestEnforcementBoard:
    @pytest.mark.asyncio
    async def test_refresh(self):
        alerts = [{"plateNumber": "XYZ999", "lotID": "lot-a", "minutesParked": 20}]
        async with make_client(lambda request: httpx.Response(200, json=alerts)) as client:
            board = EnforcementBoard(client)
            await board.refresh()
        assert board.alerts == alerts
        assert board.error is None

    @pytest.mark.asyncio
    async def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        async with make_client(handler) as client:
            board = EnforcementBoard(client)
            await board.refresh()
        assert board.error == "Failed to load alerts"
        assert board.alerts == []

    @pytest.mark.asyncio
    async def test_polls_until_stopped(self):
        hits = []

        def handler(request):
            hits.append(request.url.path)
            return httpx.Response(200, json=[])

        async with make_client(handler) as client:
            board = EnforcementBoard(client, interval=0.01)
            board.start()
            await asyncio.sleep(0.1)
            await board.stop()

        assert len(hits) >= 2
        assert set(hits) == {"/api/enforcement/alerts"}

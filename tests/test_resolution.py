"""Tests for waypoint.resolution — records, default unwrapping, settle()."""

import asyncio
import types

import pytest

from waypoint.errors import ResolutionError
from waypoint.resolution import Completed, Resolution, extract_default, settle
from waypoint.status import Status


class TestExtractDefault:
    def test_unwraps_mapping(self) -> None:
        assert extract_default({"default": "x"}) == "x"

    def test_unwraps_falsy_default(self) -> None:
        assert extract_default({"default": None}) is None

    def test_mapping_without_default(self) -> None:
        value = {"other": 1}
        assert extract_default(value) is value

    def test_unwraps_module(self) -> None:
        module = types.ModuleType("page")
        module.default = "component"  # type: ignore[attr-defined]
        assert extract_default(module) == "component"

    def test_module_without_default(self) -> None:
        module = types.ModuleType("page")
        assert extract_default(module) is module

    def test_passthrough(self) -> None:
        assert extract_default(None) is None
        assert extract_default(42) == 42
        assert extract_default("default") == "default"


class TestResolution:
    def test_busy_by_default(self) -> None:
        r = Resolution(1)
        assert r.is_busy
        assert r.value is None
        assert r.error is None

    def test_set_ready(self) -> None:
        r = Resolution(1)
        r.set_ready(None)
        assert r.is_ready
        assert r.value is None
        assert r.error is None

    def test_set_error(self) -> None:
        r = Resolution(1)
        err = ValueError("bad")
        r.set_error(err)
        assert r.is_error
        assert r.error is err

    def test_set_error_without_error(self) -> None:
        r = Resolution(7)
        r.set_error(None)
        assert r.is_error
        assert isinstance(r.error, ResolutionError)

    def test_busy_without_future(self) -> None:
        with pytest.raises(RuntimeError, match="no future"):
            _ = Resolution(1).future

    @pytest.mark.asyncio
    async def test_lazy_future_for_ready(self) -> None:
        r = Resolution(1, Status.READY, value=42)
        assert r.future.result() == 42
        assert r.future is r.future
        assert await r == 42

    @pytest.mark.asyncio
    async def test_lazy_future_for_error(self) -> None:
        r = Resolution(1, Status.ERROR, error=KeyError("k"))
        with pytest.raises(KeyError):
            await r

    @pytest.mark.asyncio
    async def test_cancelled_consumer_does_not_cancel_future(self) -> None:
        loop = asyncio.get_running_loop()
        future: asyncio.Future[str] = loop.create_future()
        r = Resolution(1, _future=future)

        async def consume() -> str:
            return await r

        consumer = asyncio.create_task(consume())
        await asyncio.sleep(0)
        consumer.cancel()
        with pytest.raises(asyncio.CancelledError):
            await consumer

        assert not future.cancelled()
        future.set_result("done")


class TestCompleted:
    @pytest.mark.asyncio
    async def test_awaits_to_value(self) -> None:
        assert await Completed() is None
        assert await Completed("data") == "data"

    def test_no_loop_needed(self) -> None:
        assert repr(Completed(1)) == "Completed(1)"


class TestSettle:
    @pytest.mark.asyncio
    async def test_empty(self) -> None:
        assert await settle() is Status.READY

    @pytest.mark.asyncio
    async def test_already_settled(self) -> None:
        ready = Resolution(1, Status.READY, value=1)
        failed = Resolution(2, Status.ERROR, error=ValueError())
        assert await settle(ready) is Status.READY
        assert await settle(ready, failed) is Status.ERROR

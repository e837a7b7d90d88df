import pytest
from unittest.mock import AsyncMock, MagicMock

from kappagotchi.core.events import ANY_EVENT, EventEmitter
from kappagotchi.data.state_types import CoreEvent, EventType


@pytest.mark.asyncio
async def test_handlers_receive_matching_events():
    emitter = EventEmitter()
    on_water = MagicMock()
    on_died = AsyncMock()
    emitter.on(EventType.WATER_APPLIED, on_water)
    emitter.on("DIED", on_died)

    water = CoreEvent(type=EventType.WATER_APPLIED)
    died = CoreEvent(type=EventType.DIED, reason="lifespan_3y")
    await emitter.emit_all([water, died])

    on_water.assert_called_once_with(water)
    on_died.assert_awaited_once_with(died)


@pytest.mark.asyncio
async def test_catch_all_sees_events_in_order():
    emitter = EventEmitter()
    seen = []
    emitter.on(ANY_EVENT, lambda e: seen.append(e.type))
    await emitter.emit_all([
        CoreEvent(type=EventType.DIED),
        CoreEvent(type=EventType.EGG_LAID),
        CoreEvent(type=EventType.HATCHED),
    ])
    assert seen == [EventType.DIED, EventType.EGG_LAID, EventType.HATCHED]


@pytest.mark.asyncio
async def test_failing_handler_does_not_stop_others():
    emitter = EventEmitter()
    after = MagicMock()
    emitter.on(EventType.MOLTED, MagicMock(side_effect=RuntimeError("boom")))
    emitter.on(EventType.MOLTED, after)
    await emitter.emit(CoreEvent(type=EventType.MOLTED))
    after.assert_called_once()


@pytest.mark.asyncio
async def test_off_and_duplicate_registration():
    emitter = EventEmitter()
    handler = MagicMock()
    emitter.on(EventType.HATCHED, handler)
    emitter.on(EventType.HATCHED, handler)
    await emitter.emit(CoreEvent(type=EventType.HATCHED))
    assert handler.call_count == 1

    emitter.off(EventType.HATCHED, handler)
    await emitter.emit(CoreEvent(type=EventType.HATCHED))
    assert handler.call_count == 1

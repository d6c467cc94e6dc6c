import pytest

from crazy_solitaire.events import EventBus, EventKind


def test_event_bus_subscribe_and_unsubscribe():
    bus = EventBus()
    seen = []
    unsubscribe = bus.subscribe(seen.append)
    event = bus.emit(EventKind.STOCK_LEVEL_CHANGED, value=2)
    assert seen == [event]
    assert event.value == 2
    unsubscribe()
    bus.emit(EventKind.WIN_REACHED, value=True)
    assert seen == [event]


def test_listeners_run_in_order_and_errors_propagate():
    bus = EventBus()
    calls = []
    bus.subscribe(lambda e: calls.append("first"))

    def boom(event):
        raise RuntimeError(event.kind.value)

    bus.subscribe(boom)
    with pytest.raises(RuntimeError, match="loss_reached"):
        bus.emit(EventKind.LOSS_REACHED, value=True)
    assert calls == ["first"]

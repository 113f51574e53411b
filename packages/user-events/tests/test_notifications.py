"""Tests for observer registration and event dispatch."""

from __future__ import annotations

import threading
from typing import Any

import pytest

from user_events import (
    WILDCARD,
    CallbackObserver,
    EventDispatcher,
    Observer,
    ObserverError,
)


class Recorder:
    def __init__(self, name: str, log: list[tuple[str, str, Any]]) -> None:
        self.name = name
        self.log = log

    def update(self, subject: Any, event: str, data: Any = None) -> None:
        self.log.append((self.name, event, data))


class TestDispatch:
    def setup_method(self) -> None:
        self.dispatcher = EventDispatcher()
        self.log: list[tuple[str, str, Any]] = []

    def recorder(self, name: str) -> Recorder:
        return Recorder(name, self.log)

    def names(self) -> list[str]:
        return [name for name, _, _ in self.log]

    def test_specific_before_wildcard_in_attach_order(self) -> None:
        w1, s1, w2, s2 = (self.recorder(n) for n in ("w1", "s1", "w2", "s2"))
        self.dispatcher.attach(w1)
        self.dispatcher.attach(s1, "entity:created")
        self.dispatcher.attach(w2, WILDCARD)
        self.dispatcher.attach(s2, "entity:created")

        self.dispatcher.notify("entity:created", {"id": "1"})
        assert self.names() == ["s1", "s2", "w1", "w2"]
        assert all(event == "entity:created" for _, event, _ in self.log)
        assert all(data == {"id": "1"} for _, _, data in self.log)

    def test_other_event_only_reaches_wildcard(self) -> None:
        self.dispatcher.attach(self.recorder("specific"), "entity:created")
        self.dispatcher.attach(self.recorder("all"))
        self.dispatcher.notify("entity:deleted")
        assert self.names() == ["all"]

    def test_wildcard_notify_not_doubled(self) -> None:
        self.dispatcher.attach(self.recorder("all"))
        self.dispatcher.notify(WILDCARD)
        assert self.names() == ["all"]

    def test_observer_receives_subject(self) -> None:
        seen: list[Any] = []
        subject = object()
        dispatcher = EventDispatcher(subject=subject)
        dispatcher.attach(CallbackObserver(lambda s, e, d: seen.append(s)))
        dispatcher.notify("x")
        assert seen == [subject]

    def test_subject_defaults_to_dispatcher(self) -> None:
        seen: list[Any] = []
        self.dispatcher.attach(CallbackObserver(lambda s, e, d: seen.append(s)))
        self.dispatcher.notify("x")
        assert seen == [self.dispatcher]

    def test_duplicate_attach_delivers_twice(self) -> None:
        r = self.recorder("dup")
        self.dispatcher.attach(r, "entity:updated")
        self.dispatcher.attach(r, "entity:updated")
        self.dispatcher.notify("entity:updated")
        assert self.names() == ["dup", "dup"]

    def test_empty_delivery_is_noop(self) -> None:
        self.dispatcher.notify("nobody:listens", 42)
        self.dispatcher.notify()
        assert self.log == []

    def test_callback_observer_satisfies_protocol(self) -> None:
        assert isinstance(CallbackObserver(lambda s, e, d: None), Observer)
        assert isinstance(self.recorder("r"), Observer)

    def test_len_and_events(self) -> None:
        r = self.recorder("r")
        self.dispatcher.attach(r)
        self.dispatcher.attach(r, "a")
        self.dispatcher.attach(r, "b")
        assert len(self.dispatcher) == 3
        assert set(self.dispatcher.events()) == {WILDCARD, "a", "b"}
        assert self.dispatcher.observers("a") == [r]


class TestDetach:
    def setup_method(self) -> None:
        self.dispatcher = EventDispatcher()
        self.log: list[tuple[str, str, Any]] = []

    def names(self) -> list[str]:
        return [name for name, _, _ in self.log]

    def test_detach_specific_keeps_wildcard_subscription(self) -> None:
        r = Recorder("r", self.log)
        self.dispatcher.attach(r, "entity:created")
        self.dispatcher.attach(r)

        self.dispatcher.detach(r, "entity:created")
        self.dispatcher.notify("entity:created")
        assert self.names() == ["r"]
        assert self.dispatcher.observers(WILDCARD) == [r]

    def test_detach_with_wildcard_present_removes_right_entry(self) -> None:
        # Wildcard observers registered first must not shift which entry is removed.
        w = Recorder("w", self.log)
        a = Recorder("a", self.log)
        b = Recorder("b", self.log)
        self.dispatcher.attach(w)
        self.dispatcher.attach(a, "entity:updated")
        self.dispatcher.attach(b, "entity:updated")

        self.dispatcher.detach(b, "entity:updated")
        self.dispatcher.notify("entity:updated")
        assert self.names() == ["a", "w"]

    def test_detach_wildcard(self) -> None:
        r = Recorder("r", self.log)
        self.dispatcher.attach(r)
        self.dispatcher.attach(r, "x")
        self.dispatcher.detach(r, WILDCARD)
        self.dispatcher.notify("x")
        self.dispatcher.notify("y")
        assert self.log == [("r", "x", None)]

    def test_detach_unknown_is_noop(self) -> None:
        r = Recorder("r", self.log)
        self.dispatcher.detach(r, "never:registered")
        self.dispatcher.detach(r)
        self.dispatcher.attach(r, "x")
        self.dispatcher.detach(Recorder("other", self.log), "x")
        self.dispatcher.notify("x")
        assert self.names() == ["r"]

    def test_detach_other_event_leaves_subscription(self) -> None:
        r = Recorder("r", self.log)
        self.dispatcher.attach(r, "a")
        self.dispatcher.attach(r, "b")
        self.dispatcher.detach(r, "a")
        self.dispatcher.notify("a")
        self.dispatcher.notify("b")
        assert self.log == [("r", "b", None)]


class TestReentrancy:
    def test_attach_during_notify_does_not_join_current_delivery(self) -> None:
        dispatcher = EventDispatcher()
        calls: list[str] = []
        late = CallbackObserver(lambda s, e, d: calls.append("late"))

        def first(subject: Any, event: str, data: Any) -> None:
            calls.append("first")
            dispatcher.attach(late, event)
            dispatcher.attach(late)

        dispatcher.attach(CallbackObserver(first), "ping")
        dispatcher.notify("ping")
        assert calls == ["first"]

        calls.clear()
        dispatcher.detach(dispatcher.observers("ping")[0], "ping")
        dispatcher.notify("ping")
        assert calls == ["late", "late"]

    def test_detach_during_notify_still_delivers_snapshot(self) -> None:
        dispatcher = EventDispatcher()
        calls: list[str] = []
        second = CallbackObserver(lambda s, e, d: calls.append("second"))

        def first(subject: Any, event: str, data: Any) -> None:
            calls.append("first")
            dispatcher.detach(second, event)

        dispatcher.attach(CallbackObserver(first), "ping")
        dispatcher.attach(second, "ping")
        dispatcher.notify("ping")
        assert calls == ["first", "second"]

        calls.clear()
        dispatcher.notify("ping")
        assert calls == ["first"]


class TestObserverFailure:
    def test_failure_aborts_remaining_and_propagates(self) -> None:
        dispatcher = EventDispatcher()
        calls: list[str] = []

        def boom(subject: Any, event: str, data: Any) -> None:
            raise RuntimeError("boom")

        failing = CallbackObserver(boom)
        dispatcher.attach(CallbackObserver(lambda s, e, d: calls.append("before")), "x")
        dispatcher.attach(failing, "x")
        dispatcher.attach(CallbackObserver(lambda s, e, d: calls.append("after")))

        with pytest.raises(ObserverError) as exc_info:
            dispatcher.notify("x")
        assert calls == ["before"]
        assert exc_info.value.event == "x"
        assert exc_info.value.observer is failing
        assert isinstance(exc_info.value.__cause__, RuntimeError)


class TestLock:
    def test_plain_lock_accepted(self) -> None:
        lock = threading.Lock()
        dispatcher = EventDispatcher(lock=lock)
        seen: list[str] = []
        dispatcher.attach(CallbackObserver(lambda s, e, d: seen.append(e)))
        dispatcher.notify("x")
        assert dispatcher.lock is lock
        assert seen == ["x"]

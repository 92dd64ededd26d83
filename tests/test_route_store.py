from __future__ import annotations

import pytest

from conftest import make_route
from pyrutas.exceptions import UnknownIdError
from pyrutas.state.events import StateChange, StateEvent
from pyrutas.state.store import RouteStore


def test_load_makes_every_route_visible() -> None:
    store = RouteStore()
    store.load([make_route(1), make_route(2), make_route(3)])

    assert store.visibility == {1: True, 2: True, 3: True}
    assert [r.id for r in store.visible_routes()] == [1, 2, 3]


def test_reload_replaces_everything_and_drops_stale_keys() -> None:
    store = RouteStore()
    store.load([make_route(1), make_route(2)])
    store.set_visible(2, False)

    store.load([make_route(2), make_route(5)])

    assert store.visibility == {2: True, 5: True}
    assert 1 not in store


def test_set_visible_unknown_id_is_ignored() -> None:
    store = RouteStore()
    store.load([make_route(1)])

    assert store.set_visible(99, False) is False
    assert store.toggle(99) is False
    assert set(store.visibility) == {1}


def test_visible_routes_keep_load_order() -> None:
    store = RouteStore()
    store.load([make_route(3), make_route(1), make_route(2)])
    store.set_visible(1, False)
    store.set_visible(1, True)

    assert [r.id for r in store.visible_routes()] == [3, 1, 2]


def test_toggle_flips_visibility() -> None:
    store = RouteStore()
    store.load([make_route(1)])

    assert store.toggle(1) is False
    assert store.is_visible(1) is False
    assert store.toggle(1) is True
    assert store.is_visible(1) is True


def test_get_unknown_raises() -> None:
    store = RouteStore()

    with pytest.raises(UnknownIdError) as excinfo:
        store.get(4)

    assert excinfo.value.route_id == 4


def test_duplicate_ids_rejected_without_touching_store() -> None:
    store = RouteStore()
    store.load([make_route(1)])

    with pytest.raises(ValueError):
        store.load([make_route(2), make_route(2)])

    assert [r.id for r in store.routes] == [1]


def test_changes_are_emitted_only_for_real_transitions() -> None:
    events: list[StateEvent] = []
    store = RouteStore(on_change=events.append)
    store.load([make_route(1)])
    store.set_visible(1, True)
    store.set_visible(1, False)
    store.set_visible(42, False)

    assert [(e.change, e.route_id) for e in events] == [
        (StateChange.ROUTES_LOADED, None),
        (StateChange.VISIBILITY, 1),
    ]

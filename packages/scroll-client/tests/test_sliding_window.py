import random

import pytest

from scroll_client.models import ListedFacility
from scroll_client.views import MapMarkerLayer, RenderedListView
from scroll_client.window import SlidingWindowCache


def _facility(facility_id: int) -> ListedFacility:
    return ListedFacility(id=facility_id, title=f"Site {facility_id}", lat=53.0, lng=-1.5)


def _batch(start: int, size: int) -> list[ListedFacility]:
    return [_facility(i) for i in range(start, start + size)]


class RecordingView:
    def __init__(self) -> None:
        self.events: list[tuple[str, list[int]]] = []

    def on_append(self, items) -> None:
        self.events.append(("append", [item.id for item in items]))

    def on_evict(self, items) -> None:
        self.events.append(("evict", [item.id for item in items]))

    def on_clear(self) -> None:
        self.events.append(("clear", []))


def test_five_batches_fill_without_eviction_and_sixth_evicts_oldest() -> None:
    window = SlidingWindowCache(max_items=100)
    for start in range(0, 100, 20):
        assert window.append(_batch(start, 20)) == []
    assert len(window) == 100

    evicted = window.append(_batch(100, 20))

    assert [item.id for item in evicted] == list(range(0, 20))
    assert [item.id for item in window.items] == list(range(20, 120))


def test_views_hear_eviction_before_append_in_same_call() -> None:
    window = SlidingWindowCache(max_items=3)
    view = RecordingView()
    window.subscribe(view)

    window.append(_batch(1, 2))
    window.append(_batch(3, 2))

    assert view.events == [("append", [1, 2]), ("evict", [1]), ("append", [3, 4])]


def test_oversized_batch_keeps_only_its_newest_items() -> None:
    window = SlidingWindowCache(max_items=3)
    view = RecordingView()
    window.subscribe(view)
    window.append(_batch(1, 2))

    window.append(_batch(10, 5))

    assert [item.id for item in window.items] == [12, 13, 14]
    assert view.events[-2:] == [("evict", [1, 2]), ("append", [12, 13, 14])]


def test_empty_append_is_silent() -> None:
    window = SlidingWindowCache(max_items=3)
    view = RecordingView()
    window.subscribe(view)

    assert window.append([]) == []
    assert view.events == []


def test_invalid_capacity_is_rejected() -> None:
    with pytest.raises(ValueError):
        SlidingWindowCache(max_items=0)


@pytest.mark.parametrize("seed", range(8))
def test_window_always_holds_most_recent_items_in_order(seed: int) -> None:
    rng = random.Random(seed)
    max_items = rng.randint(1, 30)
    window = SlidingWindowCache(max_items=max_items)
    list_view = RenderedListView()
    window.subscribe(list_view)
    appended: list[int] = []
    next_id = 0

    for _ in range(25):
        size = rng.randint(0, 12)
        window.append(_batch(next_id, size))
        appended.extend(range(next_id, next_id + size))
        next_id += size

        retained = [item.id for item in window.items]
        assert len(retained) <= max_items
        assert retained == appended[-max_items:]
        assert [row.id for row in list_view.rows] == retained


def test_list_and_map_views_stay_in_step() -> None:
    window = SlidingWindowCache(max_items=4)
    list_view = RenderedListView()
    markers = MapMarkerLayer()
    window.subscribe(list_view)
    window.subscribe(markers)

    window.append(_batch(1, 3))
    window.append(_batch(4, 3))

    assert [row.id for row in list_view.rows] == [3, 4, 5, 6]
    assert set(markers.markers) == {3, 4, 5, 6}

    window.clear()

    assert list_view.rows == []
    assert len(markers) == 0


def test_duplicate_marker_survives_until_last_copy_is_evicted() -> None:
    window = SlidingWindowCache(max_items=3)
    markers = MapMarkerLayer()
    window.subscribe(markers)

    window.append([_facility(1), _facility(2)])
    window.append([_facility(1)])
    window.append([_facility(3)])

    assert 1 in markers
    assert markers.markers[1].refs == 1

    window.append([_facility(4), _facility(5)])

    assert 1 not in markers
    assert set(markers.markers) == {3, 4, 5}


def test_unsubscribed_view_stops_receiving_events() -> None:
    window = SlidingWindowCache(max_items=3)
    view = RecordingView()
    window.subscribe(view)
    window.subscribe(view)
    window.unsubscribe(view)

    window.append(_batch(1, 1))

    assert view.events == []

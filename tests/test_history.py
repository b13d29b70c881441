"""History navigation and live-edit preservation."""

from scriptconsole.history import HistoryRing


def make_ring(*commands: str) -> HistoryRing:
    ring = HistoryRing()
    for cmd in commands:
        ring.push(cmd)
    return ring


def test_empty_ring_navigation_is_noop():
    ring = HistoryRing()
    assert ring.back() is None
    assert ring.forward() is None
    assert ring.cursor == 0
    assert ring.at_live_edit


def test_back_stabilises_at_oldest():
    ring = make_ring("a", "b", "c")
    results = [ring.back() for _ in range(6)]
    assert results == ["c", "b", "a", None, None, None]
    assert ring.cursor == 0


def test_forward_stabilises_at_live_position():
    ring = make_ring("a", "b", "c")
    ring.back()
    ring.back()
    ring.back()
    for _ in range(10):
        ring.forward()
    assert ring.cursor == len(ring)
    assert ring.forward() is None
    assert ring.cursor == 3


def test_live_edit_round_trip():
    ring = make_ring("x")
    ring.note_live_edit("draft")
    assert ring.back() == "x"
    assert ring.forward() == "draft"


def test_push_resets_cursor_and_live_edit():
    ring = make_ring("a", "b")
    ring.note_live_edit("stale")
    ring.back()
    ring.back()
    ring.push("c")
    assert ring.cursor == 3
    assert ring.live_edit == ""
    assert list(ring) == ["a", "b", "c"]


def test_note_live_edit_ignored_away_from_live_position():
    ring = make_ring("a", "b")
    ring.note_live_edit("typed")
    ring.back()
    # e.g. the UI reports the recalled entry after replacing the input box
    ring.note_live_edit("b")
    assert ring.live_edit == "typed"
    assert ring.forward() == "typed"


def test_live_edit_is_recaptured_on_return():
    ring = make_ring("a")
    ring.note_live_edit("first")
    ring.back()
    ring.forward()
    ring.note_live_edit("first, extended")
    ring.back()
    assert ring.forward() == "first, extended"


def test_navigation_scenario():
    """entries a, b with a command in progress, walked fully back and forth"""
    ring = make_ring("a", "b")
    assert ring.cursor == 2

    ring.note_live_edit("c-in-progress")
    assert ring.back() == "b"
    assert ring.cursor == 1
    assert ring.back() == "a"
    assert ring.cursor == 0
    assert ring.back() is None
    assert ring.cursor == 0
    assert ring.forward() == "b"
    assert ring.cursor == 1
    assert ring.forward() == "c-in-progress"
    assert ring.cursor == 2


def test_reset_clears_everything():
    ring = make_ring("a", "b")
    ring.note_live_edit("draft")
    ring.reset()
    assert len(ring) == 0
    assert ring.cursor == 0
    assert ring.live_edit == ""
    assert ring.back() is None

"""Tests for the Session model, payload decoding, and pure transitions."""

import pytest

from namedraw.domain.roster import RosterValidationError
from namedraw.domain.session import (
    Session,
    apply_winner,
    compute_remaining,
    reset_draw,
    session_from_payload,
    set_no_repeat,
    set_roster,
    set_sound,
    undo_last,
)

ROSTER = ["Kim", "Lee", "Park"]


def _session(**kwargs: object) -> Session:
    base: dict[str, object] = {"names": ROSTER, "remaining": ROSTER}
    base.update(kwargs)
    return Session(**base)  # type: ignore[arg-type]


def _assert_subsets(s: Session) -> None:
    assert set(s.remaining) <= set(s.names)
    assert set(s.history) <= set(s.names)


class TestSessionModel:
    def test_defaults(self) -> None:
        s = Session()
        assert s.names == []
        assert s.no_repeat is True
        assert s.sound is False
        assert s.remaining == []
        assert s.history == []

    def test_frozen(self) -> None:
        s = Session()
        with pytest.raises(Exception):
            s.sound = True  # type: ignore[misc]

    def test_pool_no_repeat_uses_remaining(self) -> None:
        s = _session(remaining=["Lee"])
        assert s.pool == ["Lee"]

    def test_pool_with_repeats_uses_names(self) -> None:
        s = _session(no_repeat=False, remaining=[])
        assert s.pool == ROSTER

    def test_payload_shape(self) -> None:
        s = _session(history=["Kim"], remaining=["Lee", "Park"], sound=True)
        assert s.to_payload() == {
            "names": ROSTER,
            "noRepeat": True,
            "sound": True,
            "remaining": ["Lee", "Park"],
            "history": ["Kim"],
        }


class TestSessionFromPayload:
    def test_round_trip(self) -> None:
        s = _session(history=["Kim"], remaining=["Lee", "Park"])
        assert session_from_payload(s.to_payload()) == s

    def test_missing_keys_use_defaults(self) -> None:
        assert session_from_payload({}) == Session()

    def test_non_dict_uses_defaults(self) -> None:
        assert session_from_payload(["Kim"]) == Session()
        assert session_from_payload("text") == Session()

    def test_wrong_typed_fields_fall_back_per_field(self) -> None:
        s = session_from_payload(
            {"names": "Kim", "noRepeat": "yes", "sound": 1, "history": {"a": 1}}
        )
        assert s.names == []
        assert s.no_repeat is True
        assert s.sound is False
        assert s.history == []

    def test_valid_fields_survive_next_to_bad_ones(self) -> None:
        s = session_from_payload({"names": ROSTER, "noRepeat": False, "sound": "loud"})
        assert s.names == ROSTER
        assert s.no_repeat is False
        assert s.sound is False

    def test_non_string_members_dropped(self) -> None:
        s = session_from_payload({"names": ["Kim", 3, None, "Lee"]})
        assert s.names == ["Kim", "Lee"]

    def test_names_renormalized(self) -> None:
        s = session_from_payload({"names": [" Kim  Min ", "Kim Min", ""]})
        assert s.names == ["Kim Min"]

    def test_stale_references_pruned(self) -> None:
        s = session_from_payload(
            {"names": ["Kim", "Lee"], "remaining": ["Lee", "Choi"], "history": ["Choi", "Kim"]}
        )
        assert s.remaining == ["Lee"]
        assert s.history == ["Kim"]
        _assert_subsets(s)

    def test_repeated_history_kept(self) -> None:
        s = session_from_payload(
            {"names": ["Kim", "Lee"], "noRepeat": False, "history": ["Kim", " Kim ", "Lee"]}
        )
        assert s.history == ["Kim", "Kim", "Lee"]

    def test_custom_defaults(self) -> None:
        defaults = Session(no_repeat=False, sound=True)
        s = session_from_payload({"names": ROSTER, "noRepeat": None}, defaults)
        assert s.no_repeat is False
        assert s.sound is True

    def test_non_dict_returns_custom_defaults(self) -> None:
        defaults = Session(sound=True)
        assert session_from_payload(None, defaults) is defaults


class TestComputeRemaining:
    def test_no_repeat_excludes_history(self) -> None:
        assert compute_remaining(_session(history=["Lee"])) == ["Kim", "Park"]

    def test_repeat_mode_is_full_roster(self) -> None:
        assert compute_remaining(_session(no_repeat=False, history=["Lee"])) == ROSTER


class TestSetRoster:
    def test_replaces_names_and_clears_history(self) -> None:
        s = set_roster(_session(history=["Kim"]), "Choi, Jung\nKang")
        assert s.names == ["Choi", "Jung", "Kang"]
        assert s.history == []
        assert s.remaining == ["Choi", "Jung", "Kang"]

    def test_keeps_flags(self) -> None:
        s = set_roster(Session(no_repeat=False, sound=True), "A,B")
        assert s.no_repeat is False
        assert s.sound is True

    def test_too_few_names_raises(self) -> None:
        with pytest.raises(RosterValidationError):
            set_roster(Session(), "Kim, Kim,  ")


class TestApplyWinner:
    def test_appends_and_removes_from_pool(self) -> None:
        s = apply_winner(_session(), "Lee")
        assert s.history == ["Lee"]
        assert s.remaining == ["Kim", "Park"]

    def test_repeat_mode_keeps_pool(self) -> None:
        s = apply_winner(_session(no_repeat=False), "Lee")
        assert s.history == ["Lee"]
        assert s.remaining == ROSTER

    def test_does_not_mutate_input(self) -> None:
        before = _session()
        apply_winner(before, "Kim")
        assert before.history == []
        assert before.remaining == ROSTER


class TestUndoLast:
    def test_empty_history_noop(self) -> None:
        s = _session()
        updated, removed = undo_last(s)
        assert updated is s
        assert removed is None

    def test_reinserts_at_front(self) -> None:
        s = _session(history=["Lee"], remaining=["Kim", "Park"])
        updated, removed = undo_last(s)
        assert removed == "Lee"
        assert updated.history == []
        assert updated.remaining == ["Lee", "Kim", "Park"]

    def test_no_duplicate_reinsert(self) -> None:
        s = _session(history=["Kim"], remaining=["Kim", "Lee", "Park"])
        updated, _ = undo_last(s)
        assert updated.remaining == ["Kim", "Lee", "Park"]

    def test_repeat_mode_leaves_pool(self) -> None:
        s = _session(no_repeat=False, history=["Kim", "Kim"])
        updated, removed = undo_last(s)
        assert removed == "Kim"
        assert updated.history == ["Kim"]
        assert updated.remaining == ROSTER


class TestResetAndOptions:
    def test_reset_draw_restores_pool(self) -> None:
        s = reset_draw(_session(history=["Kim", "Lee"], remaining=["Park"]))
        assert s.history == []
        assert s.remaining == ROSTER

    def test_reset_draw_idempotent(self) -> None:
        once = reset_draw(_session(history=["Kim"], remaining=["Lee", "Park"]))
        assert reset_draw(once) == once

    def test_enable_no_repeat_mid_session(self) -> None:
        s = set_no_repeat(_session(no_repeat=False, history=["Kim"]), True)
        assert s.remaining == ["Lee", "Park"]

    def test_enable_no_repeat_after_repeated_draws(self) -> None:
        s = set_no_repeat(_session(no_repeat=False, history=["Kim", "Kim"]), True)
        assert s.remaining == ["Lee", "Park"]
        assert s.history == ["Kim", "Kim"]

    def test_disable_no_repeat_restores_full_roster(self) -> None:
        s = set_no_repeat(_session(history=["Kim"], remaining=["Lee", "Park"]), False)
        assert s.remaining == ROSTER
        assert s.history == ["Kim"]

    def test_set_sound(self) -> None:
        assert set_sound(Session(), True).sound is True

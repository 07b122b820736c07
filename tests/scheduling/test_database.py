from datetime import timedelta

import pytest

from brainfood.scheduling import scheduler
from brainfood.scheduling.constants import ReviewRating
from brainfood.scheduling.exceptions import (
    BoxNotFoundError,
    CardNotFoundError,
    ConcurrentReviewError,
    InvalidRatingError,
)
from brainfood.scheduling.memory_state import initial_state


@pytest.fixture
def box(db, t0):
    return db.create_box("user-1", "Biology", now=t0)


def test_get_database_url_requires_env(monkeypatch):
    from brainfood.scheduling import database

    monkeypatch.delenv("DATABASE_URL", raising=False)
    with pytest.raises(ValueError):
        database.get_database_url()


def test_test_mode_switches_database(monkeypatch):
    from brainfood.scheduling import database

    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@localhost:5432/brainfood_db")
    monkeypatch.setenv("TEST_MODE", "true")

    assert database.get_database_url().endswith("/test_brainfood_db")
    assert database.is_test_mode()


def test_init_db_is_idempotent(db):
    db.init_db()
    db.init_db()


def test_box_lookup_is_scoped_to_owner(db, box):
    assert db.get_box(box["id"])["name"] == "Biology"
    assert db.get_box(box["id"], user_id="user-1") is not None
    assert db.get_box(box["id"], user_id="someone-else") is None
    assert db.get_box("missing") is None


def test_new_card_is_due_immediately(db, box, t0, config):
    card = db.create_card(box["id"], "Mitochondria", "Powerhouse of the cell", now=t0, config=config)

    state = db.load_card_state(card["id"])

    assert state.stability == config.weights.init_stability
    assert state.difficulty == config.weights.init_difficulty
    assert state.due == t0
    assert state.last_review_at == t0
    assert state.reps == 0
    assert state.lapses == 0
    assert card["version"] == 1
    assert [c["id"] for c in db.get_due_cards(box["id"], now=t0)] == [card["id"]]


def test_review_persists_state_and_log(db, box, t0, config):
    card = db.create_card(box["id"], "front", "back", now=t0, config=config)
    review_time = t0 + timedelta(days=1)

    result = db.review_card(card["id"], "good", now=review_time, config=config)

    expected = scheduler.next_review(initial_state(t0, config), ReviewRating.GOOD, review_time, config)
    assert result == expected
    assert db.load_card_state(card["id"]) == result.state
    assert db.get_card(card["id"])["version"] == 2

    logs = db.get_review_logs(card_id=card["id"])
    assert len(logs) == 1
    log = logs[0]
    assert log["rating"] is ReviewRating.GOOD
    assert log["user_id"] == "user-1"
    assert log["reviewed_at"] == review_time
    assert log["previous_stability"] == config.weights.init_stability
    assert log["new_stability"] == pytest.approx(result.state.stability)
    assert log["previous_due"] == t0
    assert log["new_due"] == result.state.due
    assert log["interval"] == result.interval


def test_review_rejects_invalid_rating(db, box, t0, config):
    card = db.create_card(box["id"], "front", "back", now=t0, config=config)

    with pytest.raises(InvalidRatingError):
        db.review_card(card["id"], "perfect", now=t0, config=config)

    assert db.get_review_logs(card_id=card["id"]) == []
    assert db.get_card(card["id"])["version"] == 1


def test_review_missing_card(db, t0, config):
    with pytest.raises(CardNotFoundError):
        db.review_card("no-such-card", ReviewRating.GOOD, now=t0, config=config)


def test_review_with_stale_version_is_rejected(db, box, t0, config):
    card = db.create_card(box["id"], "front", "back", now=t0, config=config)
    db.review_card(card["id"], "good", now=t0 + timedelta(hours=2), config=config, expected_version=1)

    with pytest.raises(ConcurrentReviewError):
        db.review_card(card["id"], "easy", now=t0 + timedelta(hours=3), config=config, expected_version=1)

    assert len(db.get_review_logs(card_id=card["id"])) == 1
    assert db.load_card_state(card["id"]).reps == 1


def test_concurrent_write_loses_cleanly(db, box, t0, config, monkeypatch):
    card = db.create_card(box["id"], "front", "back", now=t0, config=config)
    original = scheduler.next_review
    calls = []

    def racing_next_review(*args, **kwargs):
        # Another request reviews the same card while this one is in flight
        if not calls:
            calls.append(1)
            db.review_card(card["id"], "hard", now=t0 + timedelta(hours=1), config=config)
        return original(*args, **kwargs)

    monkeypatch.setattr(db.scheduler, "next_review", racing_next_review)

    with pytest.raises(ConcurrentReviewError):
        db.review_card(card["id"], "easy", now=t0 + timedelta(hours=1), config=config)

    logs = db.get_review_logs(card_id=card["id"])
    assert [log["rating"] for log in logs] == [ReviewRating.HARD]
    assert db.get_card(card["id"])["version"] == 2


def test_due_cards_ordered_oldest_first(db, box, t0, config):
    later = db.create_card(box["id"], "b", "b", now=t0 + timedelta(hours=2), config=config)
    earlier = db.create_card(box["id"], "a", "a", now=t0, config=config)
    reviewed = db.create_card(box["id"], "c", "c", now=t0, config=config)
    db.review_card(reviewed["id"], "easy", now=t0 + timedelta(hours=1), config=config)

    due = db.get_due_cards(box["id"], now=t0 + timedelta(hours=3))

    assert [c["id"] for c in due] == [earlier["id"], later["id"]]
    assert len(db.get_due_cards(box["id"], now=t0 + timedelta(hours=3), limit=1)) == 1
    assert db.get_due_cards(box["id"], now=t0 - timedelta(days=1)) == []


def test_delete_card_removes_logs(db, box, t0, config):
    card = db.create_card(box["id"], "front", "back", now=t0, config=config)
    db.review_card(card["id"], "again", now=t0 + timedelta(hours=1), config=config)

    assert db.delete_card(card["id"]) is True
    assert db.get_card(card["id"]) is None
    assert db.get_review_logs(box_id=box["id"]) == []
    assert db.delete_card(card["id"]) is False


def test_review_logs_filtered_by_time(db, box, t0, config):
    card = db.create_card(box["id"], "front", "back", now=t0, config=config)
    db.review_card(card["id"], "again", now=t0 + timedelta(days=1), config=config)
    db.review_card(card["id"], "good", now=t0 + timedelta(days=5), config=config)

    recent = db.get_review_logs(box_id=box["id"], since=t0 + timedelta(days=2))

    assert [log["rating"] for log in recent] == [ReviewRating.GOOD]
    assert len(db.get_review_logs(box_id=box["id"])) == 2


def test_card_needs_an_existing_box(db, t0, config):
    with pytest.raises(BoxNotFoundError):
        db.create_card("no-such-box", "front", "back", now=t0, config=config)

    with pytest.raises(CardNotFoundError):
        db.review_card("no-such-card", "good", now=t0, config=config)


def test_card_in_someone_elses_box_is_rejected(db, box, t0, config):
    with pytest.raises(BoxNotFoundError):
        db.create_card(box["id"], "front", "back", now=t0, config=config, user_id="someone-else")

    card = db.create_card(box["id"], "front", "back", now=t0, config=config, user_id="user-1")
    assert card["box_id"] == box["id"]


def test_box_name_is_required(db, t0):
    with pytest.raises(ValueError):
        db.create_box("user-1", "   ", now=t0)


def test_list_boxes_newest_first_with_card_counts(db, t0, config):
    old = db.create_box("user-1", "Old", now=t0)
    new = db.create_box("user-1", "New", now=t0 + timedelta(days=1))
    db.create_box("user-2", "Not mine", now=t0)
    db.create_card(old["id"], "a", "a", now=t0, config=config)
    db.create_card(old["id"], "b", "b", now=t0, config=config)

    boxes = db.list_boxes("user-1")

    assert [b["id"] for b in boxes] == [new["id"], old["id"]]
    assert [b["card_count"] for b in boxes] == [0, 2]
    assert db.list_boxes("nobody") == []


def test_update_box_renames(db, box):
    updated = db.update_box(box["id"], "  Cell biology ", user_id="user-1")

    assert updated["name"] == "Cell biology"
    assert db.get_box(box["id"])["name"] == "Cell biology"

    with pytest.raises(BoxNotFoundError):
        db.update_box(box["id"], "Stolen", user_id="someone-else")
    with pytest.raises(BoxNotFoundError):
        db.update_box("missing", "Anything")
    with pytest.raises(ValueError):
        db.update_box(box["id"], "")


def test_delete_box_cascades_to_cards_and_logs(db, box, t0, config):
    card = db.create_card(box["id"], "front", "back", now=t0, config=config)
    db.review_card(card["id"], "good", now=t0 + timedelta(hours=1), config=config)

    assert db.delete_box(box["id"], user_id="someone-else") is False
    assert db.get_box(box["id"]) is not None

    assert db.delete_box(box["id"], user_id="user-1") is True
    assert db.get_box(box["id"]) is None
    assert db.get_card(card["id"]) is None
    assert db.get_review_logs(card_id=card["id"]) == []
    assert db.delete_box(box["id"]) is False


def test_update_card_keeps_schedule(db, box, t0, config):
    card = db.create_card(box["id"], "front", "back", now=t0, config=config)
    before = db.load_card_state(card["id"])

    updated = db.update_card(card["id"], back="  new back ", user_id="user-1")

    assert updated["front"] == "front"
    assert updated["back"] == "new back"
    assert db.load_card_state(card["id"]) == before

    with pytest.raises(CardNotFoundError):
        db.update_card(card["id"], front="x", user_id="someone-else")
    with pytest.raises(CardNotFoundError):
        db.update_card("missing", front="x")


def test_card_access_is_scoped_to_owner(db, box, t0, config):
    card = db.create_card(box["id"], "front", "back", now=t0, config=config)

    assert db.get_card(card["id"], user_id="user-1")["id"] == card["id"]
    assert db.get_card(card["id"], user_id="someone-else") is None

    with pytest.raises(CardNotFoundError):
        db.review_card(card["id"], "good", now=t0, config=config, user_id="someone-else")
    assert db.get_review_logs(card_id=card["id"]) == []

    result = db.review_card(card["id"], "good", now=t0 + timedelta(hours=1), config=config, user_id="user-1")
    assert db.load_card_state(card["id"]) == result.state

    assert db.delete_card(card["id"], user_id="someone-else") is False
    assert db.delete_card(card["id"], user_id="user-1") is True

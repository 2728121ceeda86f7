"""
Repository tests against the in-memory Firestore stand-in.
"""
import re
from datetime import datetime, timedelta, timezone

import pytest

from quizcircle.core.errors import NotFoundError, StoreError
from quizcircle.models.results import Found, NotFound, StoreFailure
from quizcircle.repositories import (
    articles_repo, groups_repo, members_repo, quizzes_repo, rotations_repo, topics_repo,
)
from quizcircle.repositories.base import ARTICLES, GROUPS, MEMBERS, QUIZ_ATTEMPTS

QUESTIONS = [
    {"id": "q1", "question": "Roots ______ plants", "options": ["anchor", "a", "b", "c"], "correctAnswer": 0},
    {"id": "q2", "question": "Leaves hold ______", "options": ["x", "y", "stomata", "z"], "correctAnswer": 2},
]


def backdate(fake_db, collection, doc_id, minutes):
    fake_db.data[collection][doc_id]["created_at"] = datetime.now(timezone.utc) - timedelta(minutes=minutes)


class TestGroups:
    def test_invite_codes_are_six_lowercase_alphanumerics(self):
        for _ in range(20):
            assert re.fullmatch(r"[0-9a-z]{6}", groups_repo.new_invite_code())

    def test_create_group_stores_settings_and_zero_offset(self, group, fake_db):
        assert group["rotation_period"] == 7
        assert group["max_word_count"] == 500
        assert group["demo_time_offset"] == 0
        assert re.fullmatch(r"[0-9a-z]{6}", group["invite_code"])
        assert group["id"] in fake_db.data[GROUPS]

    def test_get_group(self, group):
        assert groups_repo.get_group(group["id"])["invite_code"] == group["invite_code"]

    def test_get_missing_group(self, fake_db):
        with pytest.raises(NotFoundError, match="Group not found"):
            groups_repo.get_group("nope")

    def test_join_group(self, group):
        result = groups_repo.join_group(group["invite_code"], "Alice")
        assert result["group"]["id"] == group["id"]
        assert result["member"]["name"] == "Alice"
        assert result["member"]["group_id"] == group["id"]

    def test_join_with_unknown_code(self, group):
        with pytest.raises(NotFoundError, match="Group not found"):
            groups_repo.join_group("zzzzzz", "Alice")

    def test_landing_page_data(self, group):
        alice = members_repo.add_member(group["id"], "Alice")
        topics_repo.submit_topic(group["id"], alice["id"], "Rivers", 1)
        rotations_repo.save_rotation(group["id"], 2, {"b": "y"})
        rotations_repo.save_rotation(group["id"], 1, {"a": "x"})

        landing = groups_repo.get_landing_page_data(group["id"])
        assert landing["group"]["id"] == group["id"]
        assert [m["name"] for m in landing["members"]] == ["Alice"]
        assert [t["topic_text"] for t in landing["topics"]] == ["Rivers"]
        assert [r["rotation_number"] for r in landing["rotations"]] == [1, 2]

    def test_landing_page_for_missing_group(self, fake_db):
        with pytest.raises(NotFoundError):
            groups_repo.get_landing_page_data("nope")

    def test_latest_and_first_group(self, fake_db):
        older = groups_repo.create_group({"rotation_period": 7})
        newer = groups_repo.create_group({"rotation_period": 14})
        backdate(fake_db, GROUPS, older["id"], 10)

        latest = groups_repo.get_latest_group()
        first = groups_repo.get_first_group()
        assert isinstance(latest, Found) and latest.record["id"] == newer["id"]
        assert isinstance(first, Found) and first.record["id"] == older["id"]

    def test_lookups_with_no_groups(self, fake_db):
        assert groups_repo.get_latest_group() == NotFound()
        assert groups_repo.get_first_group() == NotFound()
        assert groups_repo.get_group_by_invite("abc123") == NotFound()

    def test_lookups_report_store_failures(self, fake_db):
        fake_db.broken = True
        for lookup in (groups_repo.get_latest_group(), groups_repo.get_first_group(),
                       groups_repo.get_group_by_invite("abc123")):
            assert isinstance(lookup, StoreFailure)
            assert "unavailable" in lookup.error

    def test_group_by_invite(self, group):
        found = groups_repo.get_group_by_invite(group["invite_code"])
        assert isinstance(found, Found)
        assert found.record["id"] == group["id"]

    def test_store_errors_are_wrapped(self, fake_db):
        fake_db.broken = True
        with pytest.raises(StoreError, match="unavailable"):
            groups_repo.create_group({})
        with pytest.raises(StoreError):
            members_repo.list_members("g")


class TestTimeOffset:
    def test_skip_accumulates_and_reset_zeroes(self, group):
        assert groups_repo.get_group_time_offset(group["id"]) == 0
        assert groups_repo.skip_group_time(group["id"], 3_600_000)["demo_time_offset"] == 3_600_000
        assert groups_repo.skip_group_time(group["id"], 86_400_000)["demo_time_offset"] == 90_000_000
        assert groups_repo.reset_group_time_offset(group["id"])["demo_time_offset"] == 0
        assert groups_repo.get_group_time_offset(group["id"]) == 0

    def test_set_offset(self, group):
        assert groups_repo.set_group_time_offset(group["id"], 42)["demo_time_offset"] == 42

    def test_skip_on_missing_group(self, fake_db):
        with pytest.raises(NotFoundError):
            groups_repo.skip_group_time("nope", 1000)

    def test_set_on_missing_group(self, fake_db):
        with pytest.raises(StoreError):
            groups_repo.set_group_time_offset("nope", 1000)


class TestMembersTopicsRotations:
    def test_members_in_join_order(self, group, fake_db):
        alice = members_repo.add_member(group["id"], "Alice")
        bob = members_repo.add_member(group["id"], "Bob")
        backdate(fake_db, MEMBERS, alice["id"], 5)
        backdate(fake_db, MEMBERS, bob["id"], 10)
        assert [m["name"] for m in members_repo.list_members(group["id"])] == ["Bob", "Alice"]

    def test_members_scoped_to_group(self, group):
        members_repo.add_member(group["id"], "Alice")
        members_repo.add_member("other-group", "Mallory")
        assert [m["name"] for m in members_repo.list_members(group["id"])] == ["Alice"]

    def test_get_member(self, group):
        alice = members_repo.add_member(group["id"], "Alice")
        assert members_repo.get_member(alice["id"])["name"] == "Alice"
        assert members_repo.get_member("nope") is None
        assert members_repo.get_member(None) is None

    def test_topic_fields(self, group):
        topic = topics_repo.submit_topic(group["id"], "m1", "Volcanoes", 2)
        assert topic["topic_text"] == "Volcanoes"
        assert topic["rotation_cycle"] == 2
        assert "created_at" in topic

    def test_rotation_assignments_are_opaque(self, group):
        assignments = {"m1": {"topic": "t2", "due": "soon"}, "m2": ["t1"]}
        rotations_repo.save_rotation(group["id"], 1, assignments)
        assert rotations_repo.list_rotations(group["id"])[0]["assignments"] == assignments


class TestArticles:
    @pytest.mark.parametrize("content,expected", [
        ("Hello world foo", 3),
        ("  spaced   out\n\twords  ", 3),
        ("", 0),
        ("   ", 0),
    ])
    def test_word_count(self, content, expected):
        assert articles_repo.count_words(content) == expected

    def test_submit_article(self, group):
        article = articles_repo.submit_article(group["id"], "m1", 1, "Hello world foo")
        assert article["word_count"] == 3
        assert article["article_read"] is False
        assert article["rotation_number"] == 1

    def test_articles_newest_first(self, group, fake_db):
        first = articles_repo.submit_article(group["id"], "m1", 1, "one")
        second = articles_repo.submit_article(group["id"], "m2", 1, "two")
        backdate(fake_db, ARTICLES, first["id"], 30)
        assert [a["id"] for a in articles_repo.get_articles(group["id"])] == [second["id"], first["id"]]

    def test_get_article_includes_author(self, group):
        alice = members_repo.add_member(group["id"], "Alice")
        article = articles_repo.submit_article(group["id"], alice["id"], 1, "text")
        assert articles_repo.get_article(article["id"])["author"] == {"id": alice["id"], "name": "Alice"}

    def test_get_article_unknown_author(self, group):
        article = articles_repo.submit_article(group["id"], "ghost", 1, "text")
        assert articles_repo.get_article(article["id"])["author"] is None

    def test_get_missing_article(self, fake_db):
        with pytest.raises(NotFoundError, match="Article not found"):
            articles_repo.get_article("nope")

    def test_get_article_by_member_returns_latest(self, group, fake_db):
        alice = members_repo.add_member(group["id"], "Alice")
        old = articles_repo.submit_article(group["id"], alice["id"], 1, "old")
        new = articles_repo.submit_article(group["id"], alice["id"], 2, "new")
        backdate(fake_db, ARTICLES, old["id"], 60)
        latest = articles_repo.get_article_by_member(alice["id"])
        assert latest["id"] == new["id"]
        assert latest["author"]["name"] == "Alice"

    def test_get_article_by_member_without_articles(self, fake_db):
        with pytest.raises(NotFoundError):
            articles_repo.get_article_by_member("m1")

    def test_mark_read_is_idempotent(self, group):
        article = articles_repo.submit_article(group["id"], "m1", 1, "text")
        assert articles_repo.mark_article_read(article["id"])["article_read"] is True
        assert articles_repo.mark_article_read(article["id"])["article_read"] is True

    def test_mark_read_missing_article(self, fake_db):
        with pytest.raises(StoreError):
            articles_repo.mark_article_read("nope")


class TestQuizzes:
    def test_quiz_lifecycle(self, group):
        alice = members_repo.add_member(group["id"], "Alice")
        quiz = quizzes_repo.save_quiz("a1", QUESTIONS)
        assert quiz["quiz_score"] == quizzes_repo.UNATTEMPTED == -1

        stored = quizzes_repo.get_quiz("a1")
        assert stored["id"] == quiz["id"]
        assert stored["questions"] == QUESTIONS

        assert quizzes_repo.has_completed_quiz_for_article(alice["id"], "a1") is False
        attempt = quizzes_repo.save_quiz_attempt(quiz["id"], alice["id"], [0, 1], 50)
        assert attempt["score"] == 50
        assert quizzes_repo.get_quiz_by_id(quiz["id"])["quiz_score"] == 50
        assert quizzes_repo.has_completed_quiz_for_article(alice["id"], "a1") is True

    def test_one_quiz_per_article(self, fake_db):
        quizzes_repo.save_quiz("a1", QUESTIONS)
        with pytest.raises(StoreError):
            quizzes_repo.save_quiz("a1", QUESTIONS)

    def test_get_quiz_absent(self, fake_db):
        assert quizzes_repo.get_quiz("a1") is None

    def test_get_quiz_by_missing_id(self, fake_db):
        with pytest.raises(NotFoundError, match="Quiz not found"):
            quizzes_repo.get_quiz_by_id("nope")

    def test_completion_without_quiz(self, fake_db):
        assert quizzes_repo.has_completed_quiz_for_article("m1", "a1") is False

    def test_attempt_on_missing_quiz_writes_nothing(self, fake_db):
        with pytest.raises(StoreError):
            quizzes_repo.save_quiz_attempt("nope", "m1", [0], 100)
        assert fake_db.data[QUIZ_ATTEMPTS] == {}

    def test_attempts_for_member(self, fake_db):
        q1 = quizzes_repo.save_quiz("a1", QUESTIONS)
        q2 = quizzes_repo.save_quiz("a2", QUESTIONS)
        quizzes_repo.save_quiz_attempt(q1["id"], "m1", [0, 2], 100)
        quizzes_repo.save_quiz_attempt(q2["id"], "m1", [1, 1], 0)
        quizzes_repo.save_quiz_attempt(q2["id"], "m2", [0, 2], 100)

        attempts = quizzes_repo.get_quiz_attempts_for_member("m1")
        assert len(attempts) == 2
        assert sorted(a["quiz"]["article_id"] for a in attempts) == ["a1", "a2"]

    def test_attempts_for_article_with_member_names(self, group, fake_db):
        alice = members_repo.add_member(group["id"], "Alice")
        bob = members_repo.add_member(group["id"], "Bob")
        quiz = quizzes_repo.save_quiz("a1", QUESTIONS)
        first = quizzes_repo.save_quiz_attempt(quiz["id"], alice["id"], [0, 2], 100)
        quizzes_repo.save_quiz_attempt(quiz["id"], bob["id"], [1, 2], 50)
        fake_db.data[QUIZ_ATTEMPTS][first["id"]]["attempted_at"] -= timedelta(minutes=5)

        attempts = quizzes_repo.get_quiz_attempts_for_article("a1")
        assert [a["member"]["name"] for a in attempts] == ["Bob", "Alice"]
        assert [a["score"] for a in attempts] == [50, 100]

    def test_attempts_for_article_without_quiz(self, fake_db):
        assert quizzes_repo.get_quiz_attempts_for_article("a1") == []

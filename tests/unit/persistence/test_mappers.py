"""Unit tests for row/domain mappers."""

from datetime import datetime
from uuid import uuid4

from tutor.domain.value import Capability, CommentStatus
from tutor.persistence.mappers import (
    comment_to_dict,
    row_to_actor,
    row_to_comment,
    row_to_exercise,
)
from tests.conftest import make_comment, make_exercise


def _rank_row(**flags):
    row = {"id": uuid4(), "username": "ada"}
    row.update({capability.value: False for capability in Capability})
    row.update(flags)
    return row


class TestActorMapping:
    def test_true_rank_columns_become_capabilities(self):
        row = _rank_row(exercise_edit=True, comment_add=True)

        actor = row_to_actor(row)

        assert actor.capabilities == frozenset(
            {Capability.EXERCISE_EDIT, Capability.COMMENT_ADD}
        )

    def test_user_without_rank_has_no_capabilities(self):
        row = {"id": str(uuid4()), "username": "guest"}
        row.update({capability.value: None for capability in Capability})

        actor = row_to_actor(row)

        assert actor.capabilities == frozenset()
        assert actor.username == "guest"


class TestCommentMapping:
    def test_status_is_stored_as_plain_value(self):
        comment = make_comment(uuid4(), uuid4(), status=CommentStatus.HIDDEN)

        data = comment_to_dict(comment)

        assert data["status"] == "HIDDEN"
        assert data["id"] == comment.id

    def test_row_round_trip_keeps_thread_and_deletion_fields(self):
        parent = make_comment(uuid4(), uuid4())
        deleted_at = datetime(2026, 2, 1, 8, 30)
        comment = make_comment(
            parent.exercise_id, uuid4(), parent=parent, status=CommentStatus.DELETED
        ).model_copy(update={"deleted_by": parent.author_id, "deleted_at": deleted_at})

        restored = row_to_comment(comment_to_dict(comment))

        assert restored == comment

    def test_string_ids_are_parsed(self):
        comment = make_comment(uuid4(), uuid4())
        row = comment_to_dict(comment)
        row["id"] = str(row["id"])
        row["exercise_id"] = str(row["exercise_id"])

        assert row_to_comment(row).id == comment.id


def test_row_to_exercise():
    exercise = make_exercise(published=True, commentable=False)

    mapped = row_to_exercise(exercise.model_dump())

    assert mapped == exercise

"""Unit tests for permission evaluation."""

from uuid import uuid4

from tutor.domain.service import permission
from tutor.domain.value import Capability, ExerciseId
from tests.conftest import make_actor, make_comment, make_moderator


class TestPermission:
    def test_author_can_edit_and_soft_delete_own_comment(self):
        author = make_actor("ada")
        comment = make_comment(ExerciseId(uuid4()), author.id)

        assert permission.is_author(author, comment)
        assert permission.can_edit(author, comment)
        assert permission.can_soft_delete(author, comment)
        assert not permission.can_hard_delete(author)
        assert not permission.can_moderate(author)

    def test_unrelated_user_has_no_rights(self):
        comment = make_comment(ExerciseId(uuid4()), make_actor("ada").id)
        other = make_actor("bob")

        assert not permission.can_edit(other, comment)
        assert not permission.can_soft_delete(other, comment)

    def test_exercise_editor_is_moderator(self):
        comment = make_comment(ExerciseId(uuid4()), make_actor("ada").id)
        moderator = make_moderator()

        assert permission.is_moderator(moderator)
        assert permission.can_edit(moderator, comment)
        assert permission.can_hard_delete(moderator)
        assert permission.can_moderate(moderator)

    def test_admin_view_is_moderator(self):
        assert permission.is_moderator(make_actor("root", Capability.ADMIN_VIEW))

    def test_comment_capabilities_alone_do_not_make_a_moderator(self):
        actor = make_actor(
            "helper", Capability.COMMENT_EDIT, Capability.COMMENT_DELETE
        )
        assert not permission.is_moderator(actor)

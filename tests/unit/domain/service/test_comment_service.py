"""Unit tests for CommentService."""

from datetime import date, datetime, timedelta
from uuid import uuid4

import pytest

from tutor.adapter.audit import InMemoryModerationAuditLog
from tutor.adapter.notification import RecordingCommentEventPublisher
from tutor.domain.error import (
    ActorNotFoundError,
    CommentNotFoundError,
    ExerciseNotCommentableError,
    ExerciseNotFoundError,
    ExerciseNotPublishedError,
    InvalidModerationActionError,
    InvalidParentStateError,
    InvalidTransitionError,
    NotAuthorizedError,
    ParentNotFoundError,
    RateLimitExceededError,
    ValidationError,
)
from tutor.domain.repository import CommentRepository
from tutor.domain.service import CommentService
from tutor.domain.value import CommentId, CommentStatus, ModerationAction
from tutor.persistence.repository.inmemory import (
    InMemoryActorRepository,
    InMemoryExerciseRepository,
    InMemoryFlagRepository,
)
from tests.conftest import make_actor, make_comment, make_exercise, make_moderator
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


async def _seed(unit_env, *actors, exercise=None):
    exercises = await unit_env.get(InMemoryExerciseRepository)
    actor_repo = await unit_env.get(InMemoryActorRepository)
    exercise = exercises.add(exercise or make_exercise())
    for actor in actors:
        actor_repo.add(actor)
    return exercise


class TestCreate:
    @pytest.mark.asyncio
    async def test_create_top_level_comment(self, unit_env):
        # Arrange
        service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        author = make_actor("ada")
        exercise = await _seed(unit_env, author)

        # Act
        result = await service.create(
            "Why is 1/2 equal to 2/4?", exercise.id, author.id, session_id="s-42"
        )

        # Assert
        assert result.status == CommentStatus.VISIBLE
        assert result.flags_count == 0
        assert result.parent_id is None
        assert result.depth == 0
        assert result.session_id == "s-42"
        assert await comment_repo.find_by_id(result.id) == result

    @pytest.mark.asyncio
    async def test_create_publishes_event(self, unit_env):
        service = await unit_env.get(CommentService)
        publisher = await unit_env.get(RecordingCommentEventPublisher)
        author = make_actor("ada")
        exercise = await _seed(unit_env, author)

        comment = await service.create("First!", exercise.id, author.id)

        assert len(publisher.events) == 1
        event = publisher.events[0]
        assert event.comment_id == comment.id
        assert event.exercise_id == exercise.id
        assert event.author_name == "ada"
        assert event.content == "First!"

    @pytest.mark.asyncio
    async def test_publication_failure_does_not_abort(self, unit_env, monkeypatch):
        service = await unit_env.get(CommentService)
        publisher = await unit_env.get(RecordingCommentEventPublisher)
        comment_repo = await unit_env.get(CommentRepository)
        author = make_actor("ada")
        exercise = await _seed(unit_env, author)

        async def broken(event):
            raise RuntimeError("socket closed")

        monkeypatch.setattr(publisher, "publish", broken)

        comment = await service.create("Still saved", exercise.id, author.id)

        assert await comment_repo.find_by_id(comment.id) is not None

    @pytest.mark.asyncio
    async def test_reply_to_visible_parent(self, unit_env):
        service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        author = make_actor("ada")
        exercise = await _seed(unit_env, author)
        parent = await comment_repo.save(make_comment(exercise.id, make_actor().id))

        reply = await service.create("Good question", exercise.id, author.id, parent.id)

        assert reply.parent_id == parent.id
        assert reply.depth == 1

    @pytest.mark.asyncio
    async def test_reply_to_hidden_parent_rejected(self, unit_env):
        service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        author = make_actor("ada")
        exercise = await _seed(unit_env, author)
        parent = await comment_repo.save(
            make_comment(exercise.id, make_actor().id, status=CommentStatus.HIDDEN)
        )

        with pytest.raises(InvalidParentStateError):
            await service.create("Reply", exercise.id, author.id, parent.id)

    @pytest.mark.asyncio
    async def test_reply_to_unknown_parent_rejected(self, unit_env):
        service = await unit_env.get(CommentService)
        author = make_actor("ada")
        exercise = await _seed(unit_env, author)

        with pytest.raises(ParentNotFoundError):
            await service.create("Reply", exercise.id, author.id, CommentId(uuid4()))

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", "   \n\t", "x" * 10001])
    async def test_invalid_content_rejected(self, unit_env, content):
        service = await unit_env.get(CommentService)
        author = make_actor("ada")
        exercise = await _seed(unit_env, author)

        with pytest.raises(ValidationError):
            await service.create(content, exercise.id, author.id)

    @pytest.mark.asyncio
    async def test_content_at_limit_accepted(self, unit_env):
        service = await unit_env.get(CommentService)
        author = make_actor("ada")
        exercise = await _seed(unit_env, author)

        comment = await service.create("x" * 10000, exercise.id, author.id)

        assert len(comment.content) == 10000

    @pytest.mark.asyncio
    async def test_missing_exercise_id_rejected(self, unit_env):
        service = await unit_env.get(CommentService)
        author = make_actor("ada")
        await _seed(unit_env, author)

        with pytest.raises(ValidationError):
            await service.create("Hello", None, author.id)

    @pytest.mark.asyncio
    async def test_overlong_session_id_rejected(self, unit_env):
        service = await unit_env.get(CommentService)
        author = make_actor("ada")
        exercise = await _seed(unit_env, author)

        with pytest.raises(ValidationError):
            await service.create("Hello", exercise.id, author.id, session_id="s" * 256)

        accepted = await service.create(
            "Hello", exercise.id, author.id, session_id="s" * 255
        )
        assert len(accepted.session_id) == 255

    @pytest.mark.asyncio
    async def test_unknown_exercise_rejected(self, unit_env):
        service = await unit_env.get(CommentService)
        author = make_actor("ada")
        await _seed(unit_env, author)

        with pytest.raises(ExerciseNotFoundError):
            await service.create("Hello", make_exercise().id, author.id)

    @pytest.mark.asyncio
    async def test_unpublished_exercise_rejected(self, unit_env):
        service = await unit_env.get(CommentService)
        author = make_actor("ada")
        exercise = await _seed(
            unit_env, author, exercise=make_exercise(published=False)
        )

        with pytest.raises(ExerciseNotPublishedError):
            await service.create("Hello", exercise.id, author.id)

    @pytest.mark.asyncio
    async def test_non_commentable_exercise_rejected(self, unit_env):
        service = await unit_env.get(CommentService)
        author = make_actor("ada")
        exercise = await _seed(
            unit_env, author, exercise=make_exercise(commentable=False)
        )

        with pytest.raises(ExerciseNotCommentableError):
            await service.create("Hello", exercise.id, author.id)

    @pytest.mark.asyncio
    async def test_unknown_author_rejected(self, unit_env):
        service = await unit_env.get(CommentService)
        exercise = await _seed(unit_env)

        with pytest.raises(ActorNotFoundError):
            await service.create("Hello", exercise.id, make_actor().id)

    @pytest.mark.asyncio
    async def test_second_comment_within_window_rate_limited(self, unit_env):
        service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        author = make_actor("ada")
        exercise = await _seed(unit_env, author)
        await service.create("One", exercise.id, author.id)

        with pytest.raises(RateLimitExceededError):
            await service.create("Two", exercise.id, author.id)

        assert len(await comment_repo.find_by_author(author.id)) == 1


class TestEdit:
    async def _setup(self, unit_env):
        comment_repo = await unit_env.get(CommentRepository)
        author = make_actor("ada")
        exercise = await _seed(unit_env, author)
        comment = await comment_repo.save(make_comment(exercise.id, author.id))
        return author, comment

    @pytest.mark.asyncio
    async def test_author_can_edit(self, unit_env):
        service = await unit_env.get(CommentService)
        author, comment = await self._setup(unit_env)

        result = await service.edit(comment.id, "Edited text", author.id)

        assert result.content == "Edited text"
        assert result.edited_at is not None

    @pytest.mark.asyncio
    async def test_moderator_can_edit(self, unit_env):
        service = await unit_env.get(CommentService)
        _, comment = await self._setup(unit_env)
        moderator = make_moderator()
        await _seed(unit_env, moderator)

        result = await service.edit(comment.id, "Cleaned up", moderator.id)

        assert result.content == "Cleaned up"

    @pytest.mark.asyncio
    async def test_unrelated_user_cannot_edit(self, unit_env):
        service = await unit_env.get(CommentService)
        _, comment = await self._setup(unit_env)
        other = make_actor("bob")
        await _seed(unit_env, other)

        with pytest.raises(NotAuthorizedError):
            await service.edit(comment.id, "Hijacked", other.id)

    @pytest.mark.asyncio
    async def test_blank_edit_rejected(self, unit_env):
        service = await unit_env.get(CommentService)
        author, comment = await self._setup(unit_env)

        with pytest.raises(ValidationError):
            await service.edit(comment.id, "  ", author.id)

    @pytest.mark.asyncio
    async def test_patch_without_content_is_noop(self, unit_env):
        service = await unit_env.get(CommentService)
        author, comment = await self._setup(unit_env)

        result = await service.patch(comment.id, author.id, content=None)

        assert result.content == comment.content
        assert result.edited_at is None

    @pytest.mark.asyncio
    async def test_edit_deleted_comment_rejected(self, unit_env):
        service = await unit_env.get(CommentService)
        author, comment = await self._setup(unit_env)
        await service.delete(comment.id, author.id)

        with pytest.raises(InvalidTransitionError):
            await service.edit(comment.id, "Back again", author.id)

    @pytest.mark.asyncio
    async def test_edit_unknown_comment(self, unit_env):
        service = await unit_env.get(CommentService)
        author, _ = await self._setup(unit_env)

        with pytest.raises(CommentNotFoundError):
            await service.edit(CommentId(uuid4()), "Text", author.id)


class TestDelete:
    @pytest.mark.asyncio
    async def test_author_soft_deletes(self, unit_env):
        # Arrange
        service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        author = make_actor("ada")
        exercise = await _seed(unit_env, author)
        comment = await comment_repo.save(make_comment(exercise.id, author.id))

        # Act
        result = await service.delete(comment.id, author.id)

        # Assert
        assert result.status == CommentStatus.DELETED
        assert result.deleted_by == author.id
        stored = await comment_repo.find_by_id(comment.id)
        assert stored.status == CommentStatus.DELETED

    @pytest.mark.asyncio
    async def test_author_cannot_hard_delete(self, unit_env):
        service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        author = make_actor("ada")
        exercise = await _seed(unit_env, author)
        comment = await comment_repo.save(make_comment(exercise.id, author.id))

        with pytest.raises(NotAuthorizedError):
            await service.delete(comment.id, author.id, soft=False)

        assert await comment_repo.find_by_id(comment.id) is not None

    @pytest.mark.asyncio
    async def test_moderator_hard_delete_removes_thread_and_flags(self, unit_env):
        # Arrange
        service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        flag_repo = await unit_env.get(InMemoryFlagRepository)
        author, flagger, moderator = make_actor("ada"), make_actor("bob"), make_moderator()
        exercise = await _seed(unit_env, author, flagger, moderator)
        comment = await comment_repo.save(make_comment(exercise.id, author.id))
        reply = await comment_repo.save(
            make_comment(exercise.id, flagger.id, parent=comment)
        )
        await service.flag(comment.id, flagger.id)

        # Act
        result = await service.delete(comment.id, moderator.id, soft=False)

        # Assert
        assert result is None
        assert await comment_repo.find_by_id(comment.id) is None
        assert await comment_repo.find_by_id(reply.id) is None
        assert flag_repo.count_by_comment(comment.id) == 0

    @pytest.mark.asyncio
    async def test_unrelated_user_cannot_soft_delete(self, unit_env):
        service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        author, other = make_actor("ada"), make_actor("bob")
        exercise = await _seed(unit_env, author, other)
        comment = await comment_repo.save(make_comment(exercise.id, author.id))

        with pytest.raises(NotAuthorizedError):
            await service.delete(comment.id, other.id)


class TestModerate:
    async def _setup(self, unit_env, **comment_kwargs):
        comment_repo = await unit_env.get(CommentRepository)
        author, moderator = make_actor("ada"), make_moderator()
        exercise = await _seed(unit_env, author, moderator)
        comment = await comment_repo.save(
            make_comment(exercise.id, author.id, **comment_kwargs)
        )
        return author, moderator, comment

    @pytest.mark.asyncio
    async def test_show_twice_is_idempotent(self, unit_env):
        service = await unit_env.get(CommentService)
        _, moderator, comment = await self._setup(
            unit_env, status=CommentStatus.HIDDEN
        )

        first = await service.moderate(comment.id, "SHOW", moderator.id)
        second = await service.moderate(comment.id, "show", moderator.id)

        assert first.status == second.status == CommentStatus.VISIBLE
        assert second.flags_count == 0

    @pytest.mark.asyncio
    async def test_show_clears_flags_so_users_can_flag_again(self, unit_env):
        # Arrange
        service = await unit_env.get(CommentService)
        flag_repo = await unit_env.get(InMemoryFlagRepository)
        actor_repo = await unit_env.get(InMemoryActorRepository)
        _, moderator, comment = await self._setup(unit_env)
        flaggers = [actor_repo.add(make_actor(f"user{i}")) for i in range(5)]
        for flagger in flaggers:
            await service.flag(comment.id, flagger.id)
        hidden = await service.get(comment.id)
        assert hidden.status == CommentStatus.HIDDEN

        # Act
        shown = await service.moderate(comment.id, "SHOW", moderator.id)

        # Assert
        assert shown.flags_count == 0
        assert flag_repo.count_by_comment(comment.id) == 0
        reflagged = await service.flag(comment.id, flaggers[0].id)
        assert reflagged.flags_count == 1

    @pytest.mark.asyncio
    async def test_restore_only_from_deleted(self, unit_env):
        service = await unit_env.get(CommentService)
        _, moderator, comment = await self._setup(unit_env)

        with pytest.raises(InvalidTransitionError):
            await service.moderate(comment.id, "RESTORE", moderator.id)

        await service.moderate(comment.id, "DELETE", moderator.id)
        restored = await service.moderate(comment.id, "RESTORE", moderator.id)

        assert restored.status == CommentStatus.VISIBLE
        assert restored.deleted_by is None

    @pytest.mark.asyncio
    async def test_delete_through_moderation_is_soft(self, unit_env):
        service = await unit_env.get(CommentService)
        _, moderator, comment = await self._setup(unit_env)

        result = await service.moderate(comment.id, "DELETE", moderator.id)

        assert result.status == CommentStatus.DELETED
        assert result.deleted_by == moderator.id

    @pytest.mark.asyncio
    async def test_author_cannot_moderate(self, unit_env):
        service = await unit_env.get(CommentService)
        author, _, comment = await self._setup(unit_env)

        with pytest.raises(NotAuthorizedError):
            await service.moderate(comment.id, "HIDE", author.id)

    @pytest.mark.asyncio
    async def test_unknown_action_rejected(self, unit_env):
        service = await unit_env.get(CommentService)
        _, moderator, comment = await self._setup(unit_env)

        with pytest.raises(InvalidModerationActionError):
            await service.moderate(comment.id, "PURGE", moderator.id)

    @pytest.mark.asyncio
    async def test_unknown_action_from_non_moderator_is_not_authorized(self, unit_env):
        service = await unit_env.get(CommentService)
        author, _, comment = await self._setup(unit_env)

        with pytest.raises(NotAuthorizedError):
            await service.moderate(comment.id, "PURGE", author.id)

    @pytest.mark.asyncio
    async def test_unknown_action_on_missing_comment_is_not_found(self, unit_env):
        service = await unit_env.get(CommentService)
        _, moderator, _ = await self._setup(unit_env)

        with pytest.raises(CommentNotFoundError):
            await service.moderate(CommentId(uuid4()), "PURGE", moderator.id)

    @pytest.mark.asyncio
    async def test_reason_goes_to_audit_log(self, unit_env):
        service = await unit_env.get(CommentService)
        audit_log = await unit_env.get(InMemoryModerationAuditLog)
        _, moderator, comment = await self._setup(unit_env)

        await service.moderate(comment.id, "hide", moderator.id, reason="off-topic")

        assert len(audit_log.entries) == 1
        entry = audit_log.entries[0]
        assert entry.action == ModerationAction.HIDE
        assert entry.moderator_id == moderator.id
        assert entry.reason == "off-topic"


class TestListing:
    @pytest.mark.asyncio
    async def test_top_level_newest_first_and_replies_oldest_first(self, unit_env):
        # Arrange
        service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        author = make_actor("ada")
        exercise = await _seed(unit_env, author)
        base = datetime(2026, 3, 1, 12, 0)
        older = await comment_repo.save(
            make_comment(exercise.id, author.id, created_at=base)
        )
        newer = await comment_repo.save(
            make_comment(exercise.id, author.id, created_at=base + timedelta(hours=1))
        )
        first_reply = await comment_repo.save(
            make_comment(
                exercise.id, author.id, parent=older, created_at=base + timedelta(hours=2)
            )
        )
        second_reply = await comment_repo.save(
            make_comment(
                exercise.id, author.id, parent=older, created_at=base + timedelta(hours=3)
            )
        )

        # Act
        top_level = await service.list_for_exercise(exercise.id)
        replies = await service.list_for_exercise(exercise.id, parent_id=older.id)

        # Assert
        assert [c.id for c in top_level] == [newer.id, older.id]
        assert [c.id for c in replies] == [first_reply.id, second_reply.id]

    @pytest.mark.asyncio
    async def test_pages_are_zero_based(self, unit_env):
        service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        author = make_actor("ada")
        exercise = await _seed(unit_env, author)
        base = datetime(2026, 3, 1, 12, 0)
        for i in range(5):
            await comment_repo.save(
                make_comment(exercise.id, author.id, created_at=base + timedelta(minutes=i))
            )

        page0 = await service.list_for_exercise(exercise.id, page=0, page_size=2)
        page2 = await service.list_for_exercise(exercise.id, page=2, page_size=2)

        assert len(page0) == 2
        assert len(page2) == 1
        assert page2[0].created_at == base

    @pytest.mark.asyncio
    async def test_hidden_comments_listed_unless_filtered(self, unit_env):
        service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        author = make_actor("ada")
        exercise = await _seed(unit_env, author)
        await comment_repo.save(make_comment(exercise.id, author.id))
        await comment_repo.save(
            make_comment(exercise.id, author.id, status=CommentStatus.HIDDEN)
        )

        everything = await service.list_for_exercise(exercise.id)
        visible = await service.list_for_exercise(
            exercise.id, status=CommentStatus.VISIBLE
        )

        assert len(everything) == 2
        assert len(visible) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("page, page_size", [(-1, 20), (0, 0), (0, 101)])
    async def test_invalid_paging_rejected(self, unit_env, page, page_size):
        service = await unit_env.get(CommentService)
        exercise = await _seed(unit_env)

        with pytest.raises(ValidationError):
            await service.list_for_exercise(exercise.id, page=page, page_size=page_size)

    @pytest.mark.asyncio
    async def test_unknown_exercise_rejected(self, unit_env):
        service = await unit_env.get(CommentService)

        with pytest.raises(ExerciseNotFoundError):
            await service.list_for_exercise(make_exercise().id)


class TestProjections:
    @pytest.mark.asyncio
    async def test_search_is_case_insensitive(self, unit_env):
        service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        author = make_actor("ada")
        exercise = await _seed(unit_env, author)
        match = await comment_repo.save(
            make_comment(exercise.id, author.id, content="Common DENOMINATOR trick")
        )
        await comment_repo.save(make_comment(exercise.id, author.id, content="Other"))

        results = await service.search("denominator")

        assert [c.id for c in results] == [match.id]

    @pytest.mark.asyncio
    async def test_search_matches_author_username(self, unit_env):
        service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        ada, bob = make_actor("Ada_Lovelace"), make_actor("bob")
        exercise = await _seed(unit_env, ada, bob)
        by_ada = await comment_repo.save(
            make_comment(exercise.id, ada.id, content="Is 0 even?")
        )
        await comment_repo.save(make_comment(exercise.id, bob.id, content="Yes"))

        results = await service.search("lovelace")

        assert [c.id for c in results] == [by_ada.id]

    @pytest.mark.asyncio
    async def test_blank_search_returns_everything(self, unit_env):
        service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        author = make_actor("ada")
        exercise = await _seed(unit_env, author)
        for _ in range(3):
            await comment_repo.save(make_comment(exercise.id, author.id))

        assert len(await service.search("  ")) == 3

    @pytest.mark.asyncio
    async def test_date_range_is_inclusive_of_whole_days(self, unit_env):
        service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        author = make_actor("ada")
        exercise = await _seed(unit_env, author)
        late = await comment_repo.save(
            make_comment(exercise.id, author.id, created_at=datetime(2026, 3, 2, 23, 59))
        )
        await comment_repo.save(
            make_comment(exercise.id, author.id, created_at=datetime(2026, 3, 3, 0, 1))
        )

        results = await service.filter_by_date_range(date(2026, 3, 1), date(2026, 3, 2))

        assert [c.id for c in results] == [late.id]

    @pytest.mark.asyncio
    async def test_reversed_date_range_rejected(self, unit_env):
        service = await unit_env.get(CommentService)

        with pytest.raises(ValidationError):
            await service.filter_by_date_range(date(2026, 3, 2), date(2026, 3, 1))

    @pytest.mark.asyncio
    async def test_min_flags_and_status_filters(self, unit_env):
        service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        author = make_actor("ada")
        exercise = await _seed(unit_env, author)
        await comment_repo.save(make_comment(exercise.id, author.id, flags_count=1))
        flagged = await comment_repo.save(
            make_comment(
                exercise.id, author.id, flags_count=6, status=CommentStatus.HIDDEN
            )
        )

        assert [c.id for c in await service.list_by_min_flags(5)] == [flagged.id]
        assert [c.id for c in await service.list_by_status(CommentStatus.HIDDEN)] == [
            flagged.id
        ]

    @pytest.mark.asyncio
    async def test_session_author_and_recent(self, unit_env):
        service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        ada, bob = make_actor("ada"), make_actor("bob")
        exercise = await _seed(unit_env, ada, bob)
        base = datetime(2026, 3, 1, 12, 0)
        in_session = await comment_repo.save(
            make_comment(exercise.id, ada.id, session_id="s-1", created_at=base)
        )
        latest = await comment_repo.save(
            make_comment(exercise.id, bob.id, created_at=base + timedelta(hours=1))
        )

        assert [c.id for c in await service.list_by_session("s-1")] == [in_session.id]
        assert [c.id for c in await service.filter_by_author(bob.id)] == [latest.id]
        assert [c.id for c in await service.list_recent(1)] == [latest.id]
        assert len(await service.filter_by_exercise(exercise.id)) == 2

"""Integration tests for the PostgreSQL comment and flag repositories.

These tests need a migrated database at DATABASE__URL containing the
platform reference tables.
"""

import os
from datetime import datetime, timedelta
from uuid import uuid4

import pytest
from sqlalchemy import insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tutor.domain.model import Flag
from tutor.domain.repository import (
    ActorRepository,
    CommentRepository,
    ExerciseRepository,
    FlagRepository,
)
from tutor.domain.value import Capability, CommentStatus, FlagId
from tutor.persistence.tables import exercises_table, user_ranks_table, users_table
from tests.conftest import make_comment
from tests.harness import create_env_fixture

pytestmark = pytest.mark.skipif(
    "DATABASE__URL" not in os.environ,
    reason="needs a PostgreSQL database at DATABASE__URL",
)

# Integration test fixture
integration_env = create_env_fixture(unmock={"persistence"})


async def _seed(session: AsyncSession, moderator: bool = False):
    rank_id, user_id, exercise_id = uuid4(), uuid4(), uuid4()
    await session.execute(
        insert(user_ranks_table).values(
            id=rank_id,
            name=f"rank-{rank_id}",
            exercise_edit=moderator,
        )
    )
    await session.execute(
        insert(users_table).values(
            id=user_id, username=f"user-{user_id}", rank_id=rank_id
        )
    )
    await session.execute(
        insert(exercises_table).values(
            id=exercise_id, title="Percentages", published=True, commentable=True
        )
    )
    return user_id, exercise_id


class TestPostgresRepositories:
    @pytest.mark.asyncio
    async def test_actor_capabilities_come_from_rank(self, integration_env):
        session = await integration_env.get(AsyncSession)
        actors = await integration_env.get(ActorRepository)
        exercises = await integration_env.get(ExerciseRepository)
        user_id, exercise_id = await _seed(session, moderator=True)

        actor = await actors.find_by_id(user_id)
        exercise = await exercises.find_by_id(exercise_id)

        assert Capability.EXERCISE_EDIT in actor.capabilities
        assert exercise.commentable is True

    @pytest.mark.asyncio
    async def test_save_update_and_count(self, integration_env):
        # Arrange
        session = await integration_env.get(AsyncSession)
        comments = await integration_env.get(CommentRepository)
        user_id, exercise_id = await _seed(session)
        at = datetime(2026, 6, 1, 12, 0)

        # Act
        saved = await comments.save(make_comment(exercise_id, user_id, created_at=at))
        hidden = await comments.save(saved.model_copy(update={"status": CommentStatus.HIDDEN}))

        # Assert
        assert (await comments.find_by_id(saved.id)).status == CommentStatus.HIDDEN
        assert hidden.id == saved.id
        assert await comments.count_by_author_since(user_id, at) == 0
        assert await comments.count_by_author_since(user_id, at - timedelta(seconds=5)) == 1

    @pytest.mark.asyncio
    async def test_duplicate_flag_hits_unique_constraint(self, integration_env):
        session = await integration_env.get(AsyncSession)
        comments = await integration_env.get(CommentRepository)
        flags = await integration_env.get(FlagRepository)
        author_id, exercise_id = await _seed(session)
        flagger_id, _ = await _seed(session)
        comment = await comments.save(make_comment(exercise_id, author_id))

        await flags.save(Flag(id=FlagId(uuid4()), comment_id=comment.id, flagger_id=flagger_id))
        updated = await comments.increment_flags_count(comment.id)

        assert updated.flags_count == 1
        with pytest.raises(IntegrityError):
            async with session.begin_nested():
                await flags.save(
                    Flag(id=FlagId(uuid4()), comment_id=comment.id, flagger_id=flagger_id)
                )

    @pytest.mark.asyncio
    async def test_hard_delete_cascades(self, integration_env):
        session = await integration_env.get(AsyncSession)
        comments = await integration_env.get(CommentRepository)
        user_id, exercise_id = await _seed(session)
        root = await comments.save(make_comment(exercise_id, user_id))
        reply = await comments.save(make_comment(exercise_id, user_id, parent=root))

        await comments.delete(root.id)

        assert await comments.find_by_id(reply.id) is None

    @pytest.mark.asyncio
    async def test_search_matches_author_username(self, integration_env):
        session = await integration_env.get(AsyncSession)
        comments = await integration_env.get(CommentRepository)
        user_id, exercise_id = await _seed(session)
        other_id, _ = await _seed(session)
        by_user = await comments.save(
            make_comment(exercise_id, user_id, content="What is 15% of 80?")
        )
        await comments.save(make_comment(exercise_id, other_id, content="12"))

        results = await comments.search(f"USER-{user_id}")

        assert [c.id for c in results] == [by_user.id]

"""Application layer DI providers."""

from dishka import Scope, provide

from tutor.application.usecase.comment import (
    CommentItemAssembler,
    CreateCommentUseCase,
    DeleteCommentUseCase,
    FlagCommentUseCase,
    GetCommentsUseCase,
    GetCommentUseCase,
    ModerateCommentUseCase,
    SearchCommentsUseCase,
    UpdateCommentUseCase,
)
from tutor.domain.repository import ActorRepository, ExerciseRepository
from tutor.domain.service import CommentService
from tutor.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    @provide
    def get_comment_item_assembler(
        self,
        actor_repository: ActorRepository,
        exercise_repository: ExerciseRepository,
    ) -> CommentItemAssembler:
        """Provide comment read model assembler."""
        return CommentItemAssembler(
            actor_repository=actor_repository,
            exercise_repository=exercise_repository,
        )

    @provide
    def get_create_comment_use_case(
        self, comment_service: CommentService, assembler: CommentItemAssembler
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(comment_service=comment_service, assembler=assembler)

    @provide
    def get_update_comment_use_case(
        self, comment_service: CommentService, assembler: CommentItemAssembler
    ) -> UpdateCommentUseCase:
        """Provide update comment use case."""
        return UpdateCommentUseCase(comment_service=comment_service, assembler=assembler)

    @provide
    def get_delete_comment_use_case(
        self, comment_service: CommentService, assembler: CommentItemAssembler
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(comment_service=comment_service, assembler=assembler)

    @provide
    def get_flag_comment_use_case(
        self, comment_service: CommentService
    ) -> FlagCommentUseCase:
        """Provide flag comment use case."""
        return FlagCommentUseCase(comment_service=comment_service)

    @provide
    def get_moderate_comment_use_case(
        self, comment_service: CommentService, assembler: CommentItemAssembler
    ) -> ModerateCommentUseCase:
        """Provide moderate comment use case."""
        return ModerateCommentUseCase(
            comment_service=comment_service, assembler=assembler
        )

    @provide
    def get_get_comments_use_case(
        self, comment_service: CommentService, assembler: CommentItemAssembler
    ) -> GetCommentsUseCase:
        """Provide get comments use case."""
        return GetCommentsUseCase(comment_service=comment_service, assembler=assembler)

    @provide
    def get_get_comment_use_case(
        self, comment_service: CommentService, assembler: CommentItemAssembler
    ) -> GetCommentUseCase:
        """Provide get comment use case."""
        return GetCommentUseCase(comment_service=comment_service, assembler=assembler)

    @provide
    def get_search_comments_use_case(
        self, comment_service: CommentService, assembler: CommentItemAssembler
    ) -> SearchCommentsUseCase:
        """Provide search comments use case."""
        return SearchCommentsUseCase(
            comment_service=comment_service, assembler=assembler
        )

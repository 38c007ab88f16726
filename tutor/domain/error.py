"""Domain layer errors.

Every failure a comment operation can raise belongs to exactly one kind
(a direct subclass of DomainError), so callers can tell "fix your input"
from "not allowed" from "try again later".
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error (blank content, missing ids, bad paging)."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class CommentNotFoundError(NotFoundError):
    def __init__(self, comment_id: str):
        super().__init__("Comment", comment_id)


class ExerciseNotFoundError(NotFoundError):
    def __init__(self, exercise_id: str):
        super().__init__("Exercise", exercise_id)


class ParentNotFoundError(NotFoundError):
    def __init__(self, parent_id: str):
        super().__init__("Parent comment", parent_id)


class ActorNotFoundError(NotFoundError):
    def __init__(self, user_id: str):
        super().__init__("User", user_id)


class NotAuthorizedError(DomainError):
    """Raised when a user attempts an action their role does not allow."""

    def __init__(self, action: str, resource: str, resource_id: str, user_id: str):
        self.action = action
        super().__init__(
            f"User {user_id} is not authorized to {action} {resource} {resource_id}"
        )


class RateLimitExceededError(DomainError):
    """Raised when an author posts too often.

    Attributes:
        retry_after: Seconds the caller should wait, if known
    """

    def __init__(self, message: str, retry_after: int | None = None):
        self.retry_after = retry_after
        super().__init__(message)


class ConflictError(DomainError):
    """Raised when an operation conflicts with existing state."""

    pass


class SelfFlagError(ConflictError):
    def __init__(self, comment_id: str):
        super().__init__(f"Authors cannot flag their own comment {comment_id}")


class DuplicateFlagError(ConflictError):
    def __init__(self, comment_id: str, user_id: str):
        super().__init__(f"User {user_id} has already flagged comment {comment_id}")


class InvalidStateError(DomainError):
    """Raised when the target's current state does not permit the operation."""

    pass


class InvalidParentStateError(InvalidStateError):
    def __init__(self, parent_id: str, status: str):
        super().__init__(f"Cannot reply to comment {parent_id} with status {status}")


class InvalidModerationActionError(InvalidStateError):
    def __init__(self, action: str):
        self.action = action
        super().__init__(f"Unknown moderation action: {action!r}")


class InvalidTransitionError(InvalidStateError):
    def __init__(self, action: str, status: str):
        super().__init__(f"Cannot {action} a comment with status {status}")


class ThreadDepthExceededError(InvalidStateError):
    def __init__(self, max_depth: int):
        super().__init__(f"Replies cannot be nested deeper than {max_depth} levels")


class ExerciseNotPublishedError(InvalidStateError):
    def __init__(self, exercise_id: str):
        super().__init__(f"Cannot add comment to unpublished exercise {exercise_id}")


class ExerciseNotCommentableError(InvalidStateError):
    def __init__(self, exercise_id: str):
        super().__init__(f"Comments are not allowed on exercise {exercise_id}")

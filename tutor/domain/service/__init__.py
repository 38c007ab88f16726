"""Domain services."""

from . import moderation, permission
from .base import Service
from .comment_service import CommentService
from .flag_tracker import FlagTracker
from .jwt_service import JWTService
from .rate_limiter import RateLimiter
from .threading_resolver import ThreadingResolver

__all__ = [
    "CommentService",
    "FlagTracker",
    "JWTService",
    "RateLimiter",
    "Service",
    "ThreadingResolver",
    "moderation",
    "permission",
]

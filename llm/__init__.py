from .commentary import (
    CommentaryService,
    GeminiCommentaryGenerator,
    create_commentary_generator,
    fallback_commentary,
)
from .interfaces import CommentaryGenerator, NullCommentaryGenerator

__all__ = [
    "CommentaryService",
    "GeminiCommentaryGenerator",
    "create_commentary_generator",
    "fallback_commentary",
    "CommentaryGenerator",
    "NullCommentaryGenerator",
]

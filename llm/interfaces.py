from typing import Optional, Protocol


class CommentaryGenerator(Protocol):
    """Interface for the natural-language advice/commentary collaborator.

    Implementations may be slow or fail; callers go through
    ``CommentaryService``, which applies a timeout and a fallback.
    """

    async def generate_hole_completion_commentary(
        self, user_id: str, round_id: str, hole_number: int, score: int, par: int
    ) -> str:
        ...

    async def update_location_context(
        self,
        user_id: str,
        round_id: str,
        latitude: float,
        longitude: float,
        current_hole: Optional[int] = None,
        distance_to_pin: Optional[float] = None,
    ) -> None:
        ...

    def forget_round(self, round_id: str) -> None:
        ...


class NullCommentaryGenerator:
    """Stand-in used when no LLM is configured; always defers to the fallback."""

    async def generate_hole_completion_commentary(
        self, user_id: str, round_id: str, hole_number: int, score: int, par: int
    ) -> str:
        raise RuntimeError("Commentary generation is not configured")

    async def update_location_context(
        self,
        user_id: str,
        round_id: str,
        latitude: float,
        longitude: float,
        current_hole: Optional[int] = None,
        distance_to_pin: Optional[float] = None,
    ) -> None:
        return None

    def forget_round(self, round_id: str) -> None:
        return None

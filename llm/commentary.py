"""Hole-completion commentary with a strict timeout and a fixed fallback."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Dict, Optional

from google import genai
from google.genai import types

import config
from llm.interfaces import CommentaryGenerator, NullCommentaryGenerator

logger = logging.getLogger(__name__)


# --- Fallback ---

FALLBACK_COMMENTARY = {
    -2: "Eagle! Outstanding play on that hole!",
    -1: "Birdie! Nice work out there!",
    0: "Par - solid, consistent golf!",
    1: "Bogey, but keep your head up - plenty of holes left!",
    2: "Double bogey, but everyone has tough holes. Stay focused!",
}
FALLBACK_OVER = "Tough hole, but that's golf! On to the next one!"
FALLBACK_UNDER = "Great hole!"


def fallback_commentary(score: int, par: int) -> str:
    """Deterministic phrase for a score relative to par."""
    relative = score - par
    if relative in FALLBACK_COMMENTARY:
        return FALLBACK_COMMENTARY[relative]
    return FALLBACK_OVER if relative > 2 else FALLBACK_UNDER


# --- Gemini ---

@dataclass
class LocationContext:
    latitude: float
    longitude: float
    current_hole: Optional[int] = None
    distance_to_pin: Optional[float] = None


def _create_client() -> genai.Client:
    api_key = config.GOOGLE_API_KEY
    if not api_key:
        raise EnvironmentError(
            "GOOGLE_API_KEY environment variable is not set. "
            "Get an API key at https://aistudio.google.com/apikey"
        )
    return genai.Client(api_key=api_key)


class GeminiCommentaryGenerator:
    """Short caddie-style commentary from Gemini.

    Keeps the latest location context per round so commentary can refer to
    where the hole finished.
    """

    def __init__(self, client: Optional[genai.Client] = None, model: str = config.COMMENTARY_MODEL):
        self._client = client or _create_client()
        self._model = model
        self._contexts: Dict[str, LocationContext] = {}

    async def update_location_context(
        self,
        user_id: str,
        round_id: str,
        latitude: float,
        longitude: float,
        current_hole: Optional[int] = None,
        distance_to_pin: Optional[float] = None,
    ) -> None:
        self._contexts[round_id] = LocationContext(latitude, longitude, current_hole, distance_to_pin)

    def forget_round(self, round_id: str) -> None:
        self._contexts.pop(round_id, None)

    async def generate_hole_completion_commentary(
        self, user_id: str, round_id: str, hole_number: int, score: int, par: int
    ) -> str:
        prompt = (
            f"You are an encouraging golf caddie. The player just finished hole {hole_number} "
            f"(par {par}) in {score} strokes."
        )
        context = self._contexts.get(round_id)
        # Only context from the finished hole describes how it ended.
        if context is not None and context.current_hole == hole_number:
            if context.distance_to_pin is not None:
                prompt += (
                    f" Their last tracked position was {context.distance_to_pin:.1f}m "
                    f"from the pin."
                )
        prompt += " Reply with one or two short sentences."
        response = await self._client.aio.models.generate_content(
            model=self._model,
            contents=prompt,
            config=types.GenerateContentConfig(temperature=0.7, max_output_tokens=80),
        )
        text = (response.text or "").strip()
        if not text:
            raise ValueError("Empty commentary response")
        return text


def create_commentary_generator() -> CommentaryGenerator:
    """Gemini when an API key is configured, otherwise the null generator."""
    if config.GOOGLE_API_KEY:
        return GeminiCommentaryGenerator()
    logger.info("GOOGLE_API_KEY not set; using fallback commentary only")
    return NullCommentaryGenerator()


# --- Service ---

class CommentaryService:
    """Calls the commentary collaborator without ever letting it fail the caller."""

    def __init__(
        self,
        generator: Optional[CommentaryGenerator] = None,
        timeout: float = config.COMMENTARY_TIMEOUT_SECONDS,
    ):
        self._generator = generator or NullCommentaryGenerator()
        self._timeout = timeout

    async def hole_commentary(
        self, user_id: str, round_id: str, hole_number: int, score: int, par: int
    ) -> str:
        try:
            return await asyncio.wait_for(
                self._generator.generate_hole_completion_commentary(
                    user_id, round_id, hole_number, score, par
                ),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Commentary timed out after %.1fs for round %s, hole %s",
                self._timeout, round_id, hole_number,
            )
        except Exception as e:
            logger.warning(
                "Commentary failed for round %s, hole %s: %s", round_id, hole_number, e
            )
        return fallback_commentary(score, par)

    async def forward_location_context(
        self,
        user_id: str,
        round_id: str,
        latitude: float,
        longitude: float,
        current_hole: Optional[int] = None,
        distance_to_pin: Optional[float] = None,
    ) -> bool:
        """Best-effort context update. Returns False if it failed or timed out."""
        try:
            await asyncio.wait_for(
                self._generator.update_location_context(
                    user_id, round_id, latitude, longitude, current_hole, distance_to_pin
                ),
                timeout=self._timeout,
            )
            return True
        except asyncio.TimeoutError:
            logger.warning("Location context update timed out for round %s", round_id)
        except Exception as e:
            logger.error(
                "Error updating location context for user %s, round %s: %s",
                user_id, round_id, e,
            )
        return False

    def forget_round(self, round_id: str) -> None:
        try:
            self._generator.forget_round(round_id)
        except Exception as e:
            logger.warning("Failed to clear commentary context for round %s: %s", round_id, e)

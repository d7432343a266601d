"""Proximity-based hole completion analysis."""

from typing import Optional

from models import Coordinate, HoleCompletionAnalysis, HoleLayout
from tracking.geodesy import distance

HOLE_COMPLETION_DISTANCE_THRESHOLD = 5.0   # meters from the pin
GREEN_DETECTION_DISTANCE_THRESHOLD = 20.0


def unable_to_analyze(note: str) -> HoleCompletionAnalysis:
    return HoleCompletionAnalysis(
        is_near_hole=False,
        completion_confidence=0.0,
        recommended_action="Unable to analyze hole completion",
        analysis_notes=[note],
    )


def analyze_completion(coord: Coordinate, hole: Optional[HoleLayout]) -> HoleCompletionAnalysis:
    """Judge from the player's position whether the hole has been finished."""
    if hole is None:
        return unable_to_analyze("Unable to find hole information")
    if hole.pin is None:
        return unable_to_analyze("Hole has no pin location")

    to_pin = distance(coord, hole.pin)
    analysis = HoleCompletionAnalysis(
        distance_to_hole=to_pin,
        is_near_hole=to_pin <= HOLE_COMPLETION_DISTANCE_THRESHOLD,
        is_on_green=to_pin <= GREEN_DETECTION_DISTANCE_THRESHOLD,
    )

    if analysis.is_near_hole:
        analysis.completion_confidence = 0.9
        analysis.recommended_action = "Hole appears completed - confirm your score"
        analysis.analysis_notes.append(f"Within {HOLE_COMPLETION_DISTANCE_THRESHOLD:g}m of pin")
    elif analysis.is_on_green:
        analysis.completion_confidence = 0.6
        analysis.recommended_action = "On the green - continue putting"
        analysis.analysis_notes.append(f"On green, {to_pin:.1f}m from pin")
    else:
        analysis.completion_confidence = 0.2
        analysis.recommended_action = "Continue playing towards the hole"
        analysis.analysis_notes.append(f"{to_pin:.1f}m from pin")

    return analysis

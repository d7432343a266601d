"""Shot detection from consecutive GPS samples."""

from collections import deque
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Deque, Iterator, Optional, Tuple

from models import Coordinate, LocationSample, MovementAnalysis, ShotEvent
from tracking.geodesy import distance

SHOT_DETECTION_MIN_DISTANCE = 20.0          # meters
SHOT_DETECTION_MAX_SECONDS = 30.0
SHOT_DETECTION_MAX_WALKING_SPEED = 2.0      # m/s
WINDOW_RETENTION = timedelta(minutes=120)
ANALYSIS_LOOKBACK = timedelta(minutes=5)

# Ordered (minimum distance in meters, club) brackets; first match wins.
CLUB_DISTANCE_TABLE: Tuple[Tuple[float, str], ...] = (
    (250.0, "Driver"),
    (200.0, "3-Wood"),
    (180.0, "5-Wood"),
    (160.0, "4-Iron"),
    (140.0, "6-Iron"),
    (120.0, "8-Iron"),
    (100.0, "Pitching Wedge"),
    (80.0, "Sand Wedge"),
    (50.0, "Lob Wedge"),
)
DEFAULT_CLUB = "Short Iron"


@dataclass(frozen=True)
class WindowEntry:
    """One sample as kept in a movement window."""
    coordinate: Coordinate
    speed_mps: Optional[float]
    timestamp: datetime

    @classmethod
    def from_sample(cls, sample: LocationSample) -> "WindowEntry":
        return cls(sample.coordinate, sample.speed_mps, sample.timestamp)


class MovementWindow:
    """Time-bounded, ordered buffer of recent samples for one (user, round).

    Entries age out by timestamp relative to the newest entry, not by count.
    """

    def __init__(self, retention: timedelta = WINDOW_RETENTION):
        self._retention = retention
        self._entries: Deque[WindowEntry] = deque()

    def append(self, entry: WindowEntry) -> None:
        self._entries.append(entry)
        self._prune(entry.timestamp)

    def _prune(self, now: datetime) -> None:
        cutoff = now - self._retention
        while self._entries and self._entries[0].timestamp < cutoff:
            self._entries.popleft()

    @property
    def latest(self) -> Optional[WindowEntry]:
        return self._entries[-1] if self._entries else None

    def clear(self) -> None:
        self._entries.clear()

    def __iter__(self) -> Iterator[WindowEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


def calculate_shot_confidence(distance_m: float, duration_s: float, speed: float) -> float:
    confidence = 0.5

    if distance_m > 100:
        confidence += 0.2
    if distance_m > 200:
        confidence += 0.2

    if speed > 10:
        confidence += 0.1
    if speed > 20:
        confidence += 0.1

    # Very short hops are more often GPS jitter than a ball in flight.
    if duration_s < 2:
        confidence -= 0.2

    return round(max(0.1, min(1.0, confidence)), 2)


def estimate_club(distance_m: float) -> str:
    for minimum, club in CLUB_DISTANCE_TABLE:
        if distance_m >= minimum:
            return club
    return DEFAULT_CLUB


def is_shot(distance_m: float, elapsed_s: float, speed: float, prior_speed: Optional[float]) -> bool:
    """A shot is a jump from slow/stationary to fast, not sustained fast movement."""
    return (
        distance_m >= SHOT_DETECTION_MIN_DISTANCE
        and elapsed_s <= SHOT_DETECTION_MAX_SECONDS
        and speed > SHOT_DETECTION_MAX_WALKING_SPEED
        and (prior_speed or 0.0) <= SHOT_DETECTION_MAX_WALKING_SPEED
    )


class MovementAnalyzer:
    """Classifies each new sample against its predecessor as walking or a shot."""

    def __init__(self, lookback: timedelta = ANALYSIS_LOOKBACK):
        self._lookback = lookback

    def analyze(self, window: MovementWindow, sample: LocationSample) -> MovementAnalysis:
        """Classify the move from the window's newest entry to ``sample``.

        The window is left untouched; append the sample once it is accepted.
        """
        result = MovementAnalysis()

        prior = window.latest
        if prior is None or sample.timestamp - prior.timestamp > self._lookback:
            result.analysis_notes.append("Insufficient location history for analysis")
            return result

        moved = distance(prior.coordinate, sample.coordinate)
        elapsed = (sample.timestamp - prior.timestamp).total_seconds()
        speed = moved / elapsed if elapsed > 0 else 0.0

        result.estimated_distance = moved
        result.duration_seconds = elapsed
        result.speed_mps = speed

        if is_shot(moved, elapsed, speed, prior.speed_mps):
            shot = ShotEvent(
                distance_meters=moved,
                duration_seconds=elapsed,
                estimated_club=estimate_club(moved),
                confidence=calculate_shot_confidence(moved, elapsed, speed),
                start=prior.coordinate,
                end=sample.coordinate,
                timestamp=sample.timestamp,
            )
            result.shot_detected = True
            result.shot = shot
            result.analysis_notes.append(f"Shot detected: {moved:.0f}m in {elapsed:.1f}s")
        else:
            result.analysis_notes.append(f"Movement detected: {moved:.1f}m (likely walking)")

        return result

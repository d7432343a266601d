"""Per-round tracking sessions.

Each (user, round) pair owns one ``RoundSession``. Work for a session runs as
queued jobs, one at a time and in submission order, so the movement window
and accumulated shots are never touched concurrently and no lock is held
while a job awaits I/O. Sessions for different rounds run independently.
"""

import asyncio
import logging
from collections import deque
from typing import Any, Awaitable, Callable, Deque, Dict, List, Optional, Tuple

from models import ShotEvent
from tracking.movement import MovementWindow

logger = logging.getLogger(__name__)

Job = Callable[[], Awaitable[Any]]
SessionKey = Tuple[str, str]


class SessionClosedError(RuntimeError):
    """Raised for work submitted to (or pending on) a closed session."""


class RoundSession:
    """Movement window, per-hole shots and a serial job queue for one round."""

    def __init__(self, user_id: str, round_id: str):
        self.user_id = user_id
        self.round_id = round_id
        self.window = MovementWindow()
        self.current_hole: Optional[int] = None
        self._shots_by_hole: Dict[int, List[ShotEvent]] = {}
        self._pending: Deque[Tuple[Job, asyncio.Future]] = deque()
        self._worker: Optional[asyncio.Task] = None
        self._closed = False

    @property
    def key(self) -> SessionKey:
        return (self.user_id, self.round_id)

    @property
    def closed(self) -> bool:
        return self._closed

    # ================================================================
    # Job queue
    # ================================================================

    async def run(self, job: Job) -> Any:
        """Queue ``job`` behind earlier work for this round and await its result."""
        future = self.enqueue(job)
        return await future

    def enqueue(self, job: Job) -> asyncio.Future:
        if self._closed:
            raise SessionClosedError(f"Session for round {self.round_id} is closed")
        loop = asyncio.get_running_loop()
        future = loop.create_future()
        self._pending.append((job, future))
        if self._worker is None or self._worker.done():
            self._worker = loop.create_task(self._drain())
        return future

    async def _drain(self) -> None:
        while self._pending and not self._closed:
            job, future = self._pending.popleft()
            if future.done():
                continue
            try:
                result = await job()
            except asyncio.CancelledError:
                if not future.done():
                    future.set_exception(
                        SessionClosedError(f"Session for round {self.round_id} is closed")
                    )
                raise
            except Exception as e:
                if not future.done():
                    future.set_exception(e)
            else:
                if not future.done():
                    future.set_result(result)
        self._worker = None

    # ================================================================
    # Shots
    # ================================================================

    def record_shot(self, hole_number: Optional[int], shot: ShotEvent) -> None:
        """Attribute a shot to a hole, falling back to the last known hole."""
        target = hole_number if hole_number is not None else self.current_hole
        if target is None:
            logger.debug("Dropping shot for round %s: no hole detected yet", self.round_id)
            return
        self._shots_by_hole.setdefault(target, []).append(shot)

    def shots_for_hole(self, hole_number: int) -> List[ShotEvent]:
        return list(self._shots_by_hole.get(hole_number, []))

    def clear_hole(self, hole_number: int) -> None:
        self._shots_by_hole.pop(hole_number, None)

    # ================================================================
    # Lifecycle
    # ================================================================

    def close(self) -> None:
        """Stop all work for this round and discard its state."""
        if self._closed:
            return
        self._closed = True
        # A job may close its own session; it finishes and the drain loop stops.
        if (
            self._worker is not None
            and not self._worker.done()
            and self._worker is not asyncio.current_task()
        ):
            self._worker.cancel()
        self._worker = None
        while self._pending:
            _, future = self._pending.popleft()
            if not future.done():
                future.set_exception(
                    SessionClosedError(f"Session for round {self.round_id} is closed")
                )
        self.window.clear()
        self._shots_by_hole.clear()
        self.current_hole = None


class SessionRegistry:
    """Owns the live sessions, keyed by (user_id, round_id)."""

    def __init__(self, on_create: Optional[Callable[[RoundSession], Job]] = None):
        self._sessions: Dict[SessionKey, RoundSession] = {}
        self._on_create = on_create

    def get(self, user_id: str, round_id: str) -> Optional[RoundSession]:
        return self._sessions.get((user_id, round_id))

    def get_or_create(self, user_id: str, round_id: str) -> RoundSession:
        """Return the live session, creating it if needed.

        A new session gets the ``on_create`` job queued first, ahead of any
        sample, so state can be restored before processing resumes.
        """
        session = self._sessions.get((user_id, round_id))
        if session is not None and not session.closed:
            return session

        session = RoundSession(user_id, round_id)
        self._sessions[session.key] = session
        if self._on_create is not None:
            setup = self._on_create(session)
            # Failures surface in the setup job itself, not in the first sample.
            session.enqueue(setup).add_done_callback(_consume_result)
        logger.info("Started tracking session for user %s, round %s", user_id, round_id)
        return session

    def discard(self, user_id: str, round_id: str) -> bool:
        session = self._sessions.pop((user_id, round_id), None)
        if session is None:
            return False
        session.close()
        logger.info("Ended tracking session for user %s, round %s", user_id, round_id)
        return True

    def discard_round(self, round_id: str) -> int:
        """Close every session attached to a round (all users)."""
        keys = [k for k in self._sessions if k[1] == round_id]
        for user_id, rid in keys:
            self.discard(user_id, rid)
        return len(keys)

    def close_all(self) -> None:
        for user_id, round_id in list(self._sessions):
            self.discard(user_id, round_id)

    def __len__(self) -> int:
        return len(self._sessions)


def _consume_result(future: asyncio.Future) -> None:
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None and not isinstance(exc, SessionClosedError):
        logger.warning("Session setup failed: %s", exc)

"""Debounced live validation of a slug field."""
import asyncio
import logging
from typing import Awaitable, Callable, Optional

from app.models.slug import SlugStatus
from app.utils.debounce import Debouncer

logger = logging.getLogger(__name__)

SlugExistsFn = Callable[[str, Optional[int]], Awaitable[bool]]


class SlugValidator:
    """
    Tracks whether the slug currently in a form field is taken.

    Each ``submit`` starts a new generation. Only the last candidate of a
    burst of edits reaches the oracle, and only a result whose generation
    is still current changes the status.
    """

    def __init__(
        self,
        exists: SlugExistsFn,
        delay: float = 0.4,
        timeout: Optional[float] = None,
        on_change: Optional[Callable[["SlugValidator"], None]] = None,
    ):
        self._exists = exists
        self._timeout = timeout
        self._on_change = on_change
        self._debouncer = Debouncer(self._check, delay)
        self._generation = 0
        self._candidate = ""
        self._status = SlugStatus.IDLE

    @property
    def status(self) -> SlugStatus:
        return self._status

    @property
    def candidate(self) -> str:
        return self._candidate

    @property
    def can_save(self) -> bool:
        """Saving is blocked only by a confirmed collision."""
        return self._status != SlugStatus.TAKEN

    def submit(self, candidate: str, exclude_id: Optional[int] = None) -> None:
        """Register a new value of the slug field."""
        self._generation += 1
        self._candidate = (candidate or "").strip()

        if not self._candidate:
            self._debouncer.cancel()
            self._set_status(SlugStatus.IDLE)
            return

        # A verdict for the previous value must not be shown for this one
        if self._status in (SlugStatus.FREE, SlugStatus.TAKEN):
            self._set_status(SlugStatus.IDLE)

        self._debouncer.push((self._generation, self._candidate, exclude_id))

    async def wait(self) -> None:
        """Wait for the pending check, if any, to settle."""
        await self._debouncer.wait()

    def close(self) -> None:
        """Drop any pending check."""
        self._generation += 1
        self._debouncer.cancel()

    async def _check(self, request: tuple[int, str, Optional[int]]) -> None:
        generation, candidate, exclude_id = request
        if generation != self._generation:
            return

        self._set_status(SlugStatus.CHECKING)
        try:
            if self._timeout:
                taken = await asyncio.wait_for(
                    self._exists(candidate, exclude_id), self._timeout
                )
            else:
                taken = await self._exists(candidate, exclude_id)
        except asyncio.TimeoutError:
            logger.warning("Slug check for %r timed out", candidate)
            taken = False
        except Exception:
            logger.exception("Slug check for %r failed", candidate)
            taken = False

        if generation != self._generation:
            logger.debug("Dropping stale slug check for %r", candidate)
            return

        self._set_status(SlugStatus.TAKEN if taken else SlugStatus.FREE)

    def _set_status(self, status: SlugStatus) -> None:
        if status == self._status:
            return
        self._status = status
        if self._on_change:
            self._on_change(self)

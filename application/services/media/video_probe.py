"""
YouTube video ID validation.

The format is checked immediately on every change. Whether the video
actually exists is checked against the oEmbed endpoint, debounced so that
only the last value typed is probed, and only the newest probe's result is
kept.
"""

import asyncio
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional

import httpx

from common.config.config import YOUTUBE_OEMBED_URL
from common.constants import PROBE_QUIET_PERIOD_SECONDS, PROBE_TIMEOUT_SECONDS

from .debounce import Debouncer

logger = logging.getLogger(__name__)

VIDEO_ID_PATTERN = re.compile(r"^[a-zA-Z0-9_-]{11}$")

INVALID_FORMAT_MESSAGE = "Enter a valid YouTube video ID (e.g. dQw4w9WgXcQ)."
UNAVAILABLE_MESSAGE = "This video is not available."
TIMED_OUT_MESSAGE = "Checking the video took too long. Please try again."
PROBE_ERROR_MESSAGE = "An error occurred while checking the video."


class ProbeOutcome(str, Enum):
    EXISTS = "exists"
    ABSENT = "absent"
    TIMED_OUT = "timed_out"


def is_valid_video_id_format(video_id: str) -> bool:
    if not video_id or not isinstance(video_id, str):
        return False
    return VIDEO_ID_PATTERN.match(video_id.strip()) is not None


def watch_url(video_id: str) -> str:
    return f"https://www.youtube.com/watch?v={video_id}"


async def probe_video_exists(
    video_id: str,
    client: Optional[httpx.AsyncClient] = None,
    timeout: float = PROBE_TIMEOUT_SECONDS,
    oembed_url: str = YOUTUBE_OEMBED_URL,
) -> ProbeOutcome:
    """
    Check whether a YouTube video exists and can be embedded.

    Args:
        video_id: Video ID to check
        client: Optional shared HTTP client
        timeout: Overall time budget in seconds
        oembed_url: oEmbed endpoint

    Returns:
        EXISTS, ABSENT (unknown, private or not embeddable) or TIMED_OUT

    Raises:
        httpx.HTTPError: On transport errors or unexpected server errors
    """
    if not is_valid_video_id_format(video_id):
        return ProbeOutcome.ABSENT

    params = {"url": watch_url(video_id.strip()), "format": "json"}

    async def _get(http: httpx.AsyncClient) -> httpx.Response:
        return await http.get(oembed_url, params=params)

    try:
        if client is not None:
            response = await asyncio.wait_for(_get(client), timeout)
        else:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(timeout), trust_env=False
            ) as http:
                response = await asyncio.wait_for(_get(http), timeout)
    except (asyncio.TimeoutError, httpx.TimeoutException):
        logger.warning(f"Video probe for {video_id} timed out after {timeout}s")
        return ProbeOutcome.TIMED_OUT

    if response.status_code == 200:
        return ProbeOutcome.EXISTS
    if response.status_code in (400, 401, 403, 404):
        return ProbeOutcome.ABSENT

    response.raise_for_status()
    logger.warning(f"Unexpected oEmbed status {response.status_code} for {video_id}")
    return ProbeOutcome.ABSENT


@dataclass(frozen=True)
class VideoCheckResult:
    video_id: str
    outcome: Optional[ProbeOutcome]
    error: Optional[str] = None

    @property
    def exists(self) -> bool:
        return self.outcome == ProbeOutcome.EXISTS


Probe = Callable[[str], Awaitable[ProbeOutcome]]


class VideoIdValidator:
    """
    Tracks the validation state of a video ID input field.

    ``handle_change`` is called on every keystroke. ``error`` and ``exists``
    reflect the latest value only.
    """

    def __init__(
        self,
        probe: Probe = probe_video_exists,
        quiet_period: float = PROBE_QUIET_PERIOD_SECONDS,
        on_result: Optional[Callable[[VideoCheckResult], None]] = None,
    ):
        self.video_id = ""
        self.error: Optional[str] = None
        self.exists: Optional[bool] = None
        self._probe = probe
        self._on_result = on_result
        self._sequence = 0
        self._in_flight = 0
        self._debouncer = Debouncer(self._check, quiet_period)

    @property
    def checking(self) -> bool:
        return self._in_flight > 0

    def handle_change(self, value: str) -> Optional[asyncio.Task]:
        """
        Take a new input value.

        Returns:
            The scheduled probe task, or None when the value needs no probe
        """
        self._sequence += 1
        self.video_id = value
        self.exists = None

        if not value.strip():
            self._debouncer.cancel()
            self.error = None
            return None

        if not is_valid_video_id_format(value):
            self._debouncer.cancel()
            self.error = INVALID_FORMAT_MESSAGE
            return None

        self.error = None
        return self._debouncer.trigger(value.strip(), self._sequence)

    async def _check(self, video_id: str, sequence: int) -> Optional[VideoCheckResult]:
        self._in_flight += 1
        try:
            result = await self._run_probe(video_id)
        finally:
            self._in_flight -= 1

        if sequence != self._sequence:
            logger.info(f"Discarding superseded probe result for {video_id}")
            return None

        self.exists = result.exists
        self.error = result.error
        if self._on_result is not None:
            self._on_result(result)
        return result

    async def _run_probe(self, video_id: str) -> VideoCheckResult:
        try:
            outcome = await self._probe(video_id)
        except httpx.HTTPError as e:
            logger.error(f"Error checking video {video_id}: {e}")
            return VideoCheckResult(video_id, None, PROBE_ERROR_MESSAGE)

        if outcome == ProbeOutcome.EXISTS:
            return VideoCheckResult(video_id, outcome)
        if outcome == ProbeOutcome.TIMED_OUT:
            return VideoCheckResult(video_id, outcome, TIMED_OUT_MESSAGE)
        return VideoCheckResult(video_id, outcome, UNAVAILABLE_MESSAGE)

    async def close(self) -> None:
        await self._debouncer.close()

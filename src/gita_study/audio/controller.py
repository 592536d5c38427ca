"""
Audio Playlist Controller: playback state machine for one verse view.

Two mutually exclusive channels (traditional chant, vibe) are driven
through the MediaChannel protocol. On mount the vibe asset is probed and,
when present, autoplayed. Playback start may be rejected by the runtime
at any time; rejection is an expected outcome and simply leaves the
channel stopped. When a vibe track ends and auto-advance is on, the
controller asks the injected navigator for the next playlist entry.

Cancellation: every mount/unmount bumps a generation counter. Async
callbacks capture the generation they were started under and re-check it
before touching state, so a late probe or play result from a previous
verse is discarded.

State is only mutated from the event loop thread; there is no locking.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, Protocol

from gita_study.audio.listen_log import ListenLogDebouncer
from gita_study.audio.playlist import VIBE, Playlist, PlaylistEntry
from gita_study.audio.probe import (
    audio_asset_exists,
    traditional_audio_url,
    vibe_audio_url,
)
from gita_study.config.constants import (
    DEFAULT_VOLUME,
    TRADITIONAL_AUDIO_BASE_URL,
    VIBE_AUDIO_BASE_URL,
)
from gita_study.schemas.listen_event import ListenEvent, TrackType

logger = logging.getLogger(__name__)

ProbeFn = Callable[[str], Awaitable[bool]]
NavigateFn = Callable[[int, int], Any]
ListenSink = Callable[[ListenEvent], Awaitable[Any]]
StateListener = Callable[["PlaybackSnapshot"], None]


class MediaChannel(Protocol):
    """A single audio element owned exclusively by one controller."""

    def load(self, src: Optional[str]) -> None: ...

    async def play(self) -> None:
        """Start playback; raises if the runtime rejects it."""

    def pause(self) -> None: ...

    def set_volume(self, volume: float) -> None: ...

    def set_muted(self, muted: bool) -> None: ...


class PlaybackState(str, Enum):
    IDLE = "idle"
    PROBING = "probing"
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"
    PLAYING_TRADITIONAL = "playing_traditional"
    PLAYING_VIBE = "playing_vibe"
    STOPPED = "stopped"


class ProbeStatus(str, Enum):
    """Availability of the vibe channel for the mounted verse."""

    UNKNOWN = "unknown"
    PROBING = "probing"
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class PlaybackSnapshot:
    """What a rendering layer needs to draw the audio controls."""

    chapter: Optional[int]
    verse: Optional[int]
    state: PlaybackState
    playing: Optional[TrackType]
    vibe_status: ProbeStatus
    traditional_enabled: bool
    vibe_enabled: bool
    volume: float
    muted: bool
    auto_advance: bool
    has_previous: bool
    has_next: bool


def _other(channel: TrackType) -> TrackType:
    return TrackType.VIBE if channel == TrackType.TRADITIONAL else TrackType.TRADITIONAL


class AudioPlaylistController:
    """Playback of at most one of two channels for the mounted verse."""

    def __init__(
        self,
        traditional: MediaChannel,
        vibe: MediaChannel,
        *,
        probe: ProbeFn = audio_asset_exists,
        navigate: Optional[NavigateFn] = None,
        listen_sink: Optional[ListenSink] = None,
        user_id: Optional[str] = None,
        playlist: Playlist = VIBE,
        vibe_base_url: str = VIBE_AUDIO_BASE_URL,
        traditional_base_url: str = TRADITIONAL_AUDIO_BASE_URL,
        debouncer: Optional[ListenLogDebouncer] = None,
        volume: float = DEFAULT_VOLUME,
        auto_advance: bool = False,
    ):
        self._channels: dict[TrackType, MediaChannel] = {
            TrackType.TRADITIONAL: traditional,
            TrackType.VIBE: vibe,
        }
        self._probe = probe
        self._navigate = navigate
        self._listen_sink = listen_sink
        self.user_id = user_id
        self.playlist = playlist
        self.vibe_base_url = vibe_base_url
        self.traditional_base_url = traditional_base_url
        self._debouncer = debouncer or ListenLogDebouncer()
        self._listeners: list[StateListener] = []

        self.chapter: Optional[int] = None
        self.verse: Optional[int] = None
        self.traditional_src: Optional[str] = None
        self.vibe_src: Optional[str] = None
        self.vibe_status = ProbeStatus.UNKNOWN
        self.volume = min(1.0, max(0.0, float(volume)))
        self.muted = False
        self.auto_advance = auto_advance

        self._playing: Optional[TrackType] = None
        self._stopped = False
        self._generation = 0
        self._play_seq = 0
        self._probe_task: Optional[asyncio.Task] = None
        self._background: set[asyncio.Task] = set()

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def playing(self) -> Optional[TrackType]:
        return self._playing

    @property
    def state(self) -> PlaybackState:
        if self._playing == TrackType.TRADITIONAL:
            return PlaybackState.PLAYING_TRADITIONAL
        if self._playing == TrackType.VIBE:
            return PlaybackState.PLAYING_VIBE
        if self._stopped:
            return PlaybackState.STOPPED
        return {
            ProbeStatus.UNKNOWN: PlaybackState.IDLE,
            ProbeStatus.PROBING: PlaybackState.PROBING,
            ProbeStatus.AVAILABLE: PlaybackState.AVAILABLE,
            ProbeStatus.UNAVAILABLE: PlaybackState.UNAVAILABLE,
        }[self.vibe_status]

    def is_available(self, channel: TrackType) -> bool:
        """Traditional is available when configured; vibe only after a successful probe."""
        if self.chapter is None:
            return False
        if channel == TrackType.TRADITIONAL:
            return bool(self.traditional_src)
        return self.vibe_status == ProbeStatus.AVAILABLE

    def previous_entry(self) -> Optional[PlaylistEntry]:
        if self.chapter is None or self.verse is None:
            return None
        return self.playlist.previous(self.chapter, self.verse)

    def next_entry(self) -> Optional[PlaylistEntry]:
        if self.chapter is None or self.verse is None:
            return None
        return self.playlist.next(self.chapter, self.verse)

    def snapshot(self) -> PlaybackSnapshot:
        return PlaybackSnapshot(
            chapter=self.chapter,
            verse=self.verse,
            state=self.state,
            playing=self._playing,
            vibe_status=self.vibe_status,
            traditional_enabled=self.is_available(TrackType.TRADITIONAL),
            vibe_enabled=self.is_available(TrackType.VIBE),
            volume=self.volume,
            muted=self.muted,
            auto_advance=self.auto_advance,
            has_previous=self.previous_entry() is not None,
            has_next=self.next_entry() is not None,
        )

    def add_listener(self, listener: StateListener) -> None:
        """Register a callback invoked with a snapshot after every transition."""
        self._listeners.append(listener)

    def _notify(self) -> None:
        if not self._listeners:
            return
        snap = self.snapshot()
        for listener in self._listeners:
            listener(snap)

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def mount(self, chapter: int, verse: int) -> asyncio.Task:
        """
        Open a verse: reset everything, then probe the vibe asset.

        Must be called from a running event loop. Returns the probe task.
        """
        self._teardown()
        self.chapter, self.verse = chapter, verse
        self.traditional_src = traditional_audio_url(chapter, verse, self.traditional_base_url)
        self.vibe_src = vibe_audio_url(chapter, verse, self.vibe_base_url)
        self._channels[TrackType.TRADITIONAL].load(self.traditional_src)
        self._channels[TrackType.VIBE].load(self.vibe_src)
        self._apply_volume()

        self.vibe_status = ProbeStatus.PROBING
        generation = self._generation
        logger.debug("Mounted %d.%d (generation %d), probing %s",
                     chapter, verse, generation, self.vibe_src)
        self._probe_task = asyncio.get_running_loop().create_task(
            self._run_probe(generation, self.vibe_src)
        )
        self._notify()
        return self._probe_task

    def unmount(self) -> None:
        """Close the verse view: pause everything and invalidate pending work."""
        self._teardown()
        self.chapter = self.verse = None
        self.traditional_src = self.vibe_src = None
        self._notify()

    def _teardown(self) -> None:
        self._generation += 1
        if self._probe_task is not None and not self._probe_task.done():
            self._probe_task.cancel()
        self._probe_task = None
        for media in self._channels.values():
            media.pause()
        self._playing = None
        self._stopped = False
        self.vibe_status = ProbeStatus.UNKNOWN

    async def _run_probe(self, generation: int, url: str) -> None:
        try:
            available = await self._probe(url)
        except Exception as e:
            logger.warning("Vibe audio probe failed for %s: %s", url, e)
            available = False

        if not self._is_current(generation):
            logger.debug("Discarding stale probe result for %s", url)
            return

        self.vibe_status = ProbeStatus.AVAILABLE if available else ProbeStatus.UNAVAILABLE
        self._notify()
        if available:
            await self._start(TrackType.VIBE, generation)

    async def wait_idle(self) -> None:
        """Wait for the pending probe and any fire-and-forget work to settle."""
        while True:
            pending = [t for t in self._background if not t.done()]
            if self._probe_task is not None and not self._probe_task.done():
                pending.append(self._probe_task)
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    # ------------------------------------------------------------------
    # Playback
    # ------------------------------------------------------------------

    async def toggle(self, channel: TrackType) -> bool:
        """
        Play or pause ``channel``. Starting one channel stops the other.

        Returns True if ``channel`` is playing afterwards.
        """
        channel = TrackType(channel)
        if self._playing == channel:
            self._channels[channel].pause()
            self._playing = None
            self._stopped = True
            self._notify()
            return False

        if not self.is_available(channel):
            logger.debug("Ignoring toggle of unavailable channel %s", channel.value)
            return False

        return await self._start(channel, self._generation)

    async def _start(self, channel: TrackType, generation: int) -> bool:
        media = self._channels[channel]
        self._channels[_other(channel)].pause()
        self._playing = channel
        self._stopped = False
        self._play_seq += 1
        token = self._play_seq
        self._notify()

        try:
            await media.play()
        except Exception as e:
            logger.info("Playback of %s rejected for %s.%s: %s",
                        channel.value, self.chapter, self.verse, e)
            if (token == self._play_seq and self._is_current(generation)
                    and self._playing == channel):
                self._playing = None
                self._stopped = True
                self._notify()
            return False

        if self._playing != channel:
            # Superseded while play() was pending
            media.pause()
            return False
        if token != self._play_seq or not self._is_current(generation):
            # A later play attempt owns this channel now
            return False

        self._log_listen(channel)
        return True

    def on_ended(self, channel: TrackType) -> None:
        """Natural end of track. A finished vibe track may advance the playlist."""
        channel = TrackType(channel)
        if self._playing != channel:
            return
        self._playing = None
        self._stopped = True
        self._notify()

        if channel != TrackType.VIBE or not self.auto_advance:
            return
        target = self.next_entry()
        if target is None:
            logger.debug("End of playlist at %s.%s", self.chapter, self.verse)
            return
        logger.info("Auto-advancing to %d.%d", target.chapter, target.verse)
        self._request_navigation(target)

    # ------------------------------------------------------------------
    # Playlist navigation
    # ------------------------------------------------------------------

    def go_previous(self) -> bool:
        target = self.previous_entry()
        if target is None:
            return False
        self._request_navigation(target)
        return True

    def go_next(self) -> bool:
        target = self.next_entry()
        if target is None:
            return False
        self._request_navigation(target)
        return True

    def _request_navigation(self, target: PlaylistEntry) -> None:
        if self._navigate is None:
            logger.debug("No navigator configured; staying on %s.%s", self.chapter, self.verse)
            return
        result = self._navigate(target.chapter, target.verse)
        if inspect.isawaitable(result):
            self._spawn(result)

    # ------------------------------------------------------------------
    # Volume / mute / preferences
    # ------------------------------------------------------------------

    def set_volume(self, volume: float) -> None:
        """Clamp to 0.0-1.0; a nonzero volume clears mute."""
        self.volume = min(1.0, max(0.0, float(volume)))
        if self.muted and self.volume > 0:
            self.muted = False
        self._apply_volume()
        self._notify()

    def set_muted(self, muted: bool) -> None:
        self.muted = bool(muted)
        self._apply_volume()
        self._notify()

    def toggle_mute(self) -> None:
        self.set_muted(not self.muted)

    def set_auto_advance(self, enabled: bool) -> None:
        self.auto_advance = bool(enabled)
        self._notify()

    def _apply_volume(self) -> None:
        # Applied to both channels so the inactive one is ready when started
        for media in self._channels.values():
            media.set_volume(self.volume)
            media.set_muted(self.muted)

    # ------------------------------------------------------------------
    # Listen logging
    # ------------------------------------------------------------------

    def _log_listen(self, channel: TrackType) -> None:
        if self._listen_sink is None or not self.user_id:
            return
        if self.chapter is None or self.verse is None:
            return
        if not self._debouncer.should_log((self.chapter, self.verse, channel.value)):
            return
        event = ListenEvent(
            user_id=self.user_id,
            chapter=self.chapter,
            verse=self.verse,
            track_type=channel,
        )
        self._spawn(self._send_listen(event))

    async def _send_listen(self, event: ListenEvent) -> None:
        try:
            await self._listen_sink(event)  # type: ignore[misc]
        except Exception as e:
            logger.warning("Listen log failed for %d.%d %s: %s",
                           event.chapter, event.verse, event.track_type.value, e)

    def _spawn(self, awaitable: Awaitable[Any]) -> None:
        task = asyncio.ensure_future(awaitable)
        self._background.add(task)
        task.add_done_callback(self._background.discard)

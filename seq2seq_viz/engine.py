"""Simulation playback engine.

Owns the current ``SimulationSnapshot`` and drives it through
Idle -> Translating -> Encoding -> Context -> Decoding -> Done using two timers:

- the animation tick, rescheduled after every snapshot change and fired after
  ``animation_speed`` ms while playing;
- the context settle delay, armed once when Context is advanced and fired after
  ``context_settle_ms`` regardless of speed changes.

Both timers and the in-flight gateway call are tagged with the generation that
scheduled them. ``reset()`` and every start request bump the generation, so
callbacks from an earlier run are inert.

Usage:
    engine = SimulationEngine(on_snapshot=render)
    await engine.start_translation("how are you", "en", "hi")
    engine.toggle_pause()  # play
"""

import asyncio
import logging
from typing import Callable, Optional

from . import transitions
from .config import SimulationConfig, is_missing_credential
from .errors import EmptyResult, GatewayFailure, MissingCredential, SimulationError, ValidationError
from .gateway import GeminiGateway, TranslationGateway
from .languages import Language, LanguagePair
from .scheduler import AsyncioScheduler, Scheduler, TimerHandle
from .snapshot import PLAYBACK_PHASES, Phase, SimulationSnapshot
from .tokenizer import tokenize
from .vectors import VectorGenerator

logger = logging.getLogger(__name__)

SnapshotListener = Callable[[SimulationSnapshot], None]


class SimulationEngine:
    """Finite-state machine and timing controller for one visualizer session.

    Args:
        gateway: Translation gateway (defaults to GeminiGateway built from config)
        config: SimulationConfig (defaults to SimulationConfig.from_env())
        scheduler: Timer source (defaults to the running asyncio loop)
        vectors: Vector source (defaults to VectorGenerator seeded from config)
        on_snapshot: Called with every new snapshot
        on_error: Called with every validation or gateway failure
    """

    def __init__(
        self,
        gateway: Optional[TranslationGateway] = None,
        config: Optional[SimulationConfig] = None,
        scheduler: Optional[Scheduler] = None,
        vectors: Optional[VectorGenerator] = None,
        on_snapshot: Optional[SnapshotListener] = None,
        on_error: Optional[Callable[[SimulationError], None]] = None,
    ):
        self.config = config or SimulationConfig.from_env()
        self.gateway = gateway or GeminiGateway.from_config(self.config)
        self.scheduler = scheduler or AsyncioScheduler()
        self.vectors = vectors or VectorGenerator(self.config.vector_size, self.config.seed)
        self.on_error = on_error

        self._listeners: list[SnapshotListener] = []
        if on_snapshot:
            self._listeners.append(on_snapshot)

        self._generation = 0
        self._tick_handle: Optional[TimerHandle] = None
        self._settle_handle: Optional[TimerHandle] = None
        self._snapshot = transitions.initial(self.config, self.vectors)
        self.last_error: Optional[Exception] = None

    @property
    def snapshot(self) -> SimulationSnapshot:
        return self._snapshot

    @property
    def generation(self) -> int:
        return self._generation

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register a snapshot listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Control entry points
    # ------------------------------------------------------------------

    async def start_translation(
        self,
        text: str,
        source: "str | Language | None" = None,
        target: "str | Language | None" = None,
    ) -> SimulationSnapshot:
        """Validate, call the gateway, and seed a new run on success.

        Only accepted from Idle; a finished run must be reset first. Failures do
        not raise: they leave the engine Idle with ``snapshot.error`` set and
        ``last_error`` holding the classified exception. Any other gateway
        exception returns the engine to Idle as well and is re-raised.
        """
        current = self._snapshot
        if current.phase is not Phase.IDLE:
            return self._reject(
                ValidationError(
                    "A simulation is already in progress. Reset before starting a new translation."
                )
            )

        languages = current.languages
        if source is not None or target is not None:
            try:
                languages = LanguagePair(
                    source=Language.from_code(source) if source is not None else languages.source,
                    target=Language.from_code(target) if target is not None else languages.target,
                )
            except ValueError as e:
                return self._reject(ValidationError(str(e)))

        if is_missing_credential(self.config.api_key):
            return self._reject(MissingCredential())
        text = text.strip()
        if not tokenize(text):
            return self._reject(ValidationError("Please enter a sentence to translate."))

        self._cancel_timers()
        self._generation += 1
        generation = self._generation
        self.last_error = None
        self._publish(
            transitions.begin_translation(current, text, languages, self.vectors, generation)
        )
        logger.info(
            f"Run {generation}: translating {len(text)} chars "
            f"{languages.source.value} -> {languages.target.value}"
        )

        try:
            translated = await self.gateway.translate(
                text,
                languages.source.display_name,
                languages.target.display_name,
                self.config.api_key,
            )
            output_tokens = tokenize(translated or "")
            if not output_tokens:
                raise EmptyResult()
        except GatewayFailure as e:
            if generation != self._generation:
                logger.debug(f"Run {generation}: dropping failure from a superseded run")
                return self._snapshot
            logger.error(f"Run {generation}: translation failed: {e}")
            self.last_error = e
            self._publish(transitions.fail_translation(self._snapshot, str(e)))
            self._notify_error(e)
            return self._snapshot
        except asyncio.CancelledError:
            if generation == self._generation:
                self._publish(transitions.fail_translation(self._snapshot, "Translation cancelled."))
            raise
        except Exception as e:
            # Unclassified gateway error: leave Translating, then fail loud
            if generation == self._generation:
                logger.error(f"Run {generation}: unexpected gateway error: {e!r}")
                self.last_error = e
                self._publish(
                    transitions.fail_translation(self._snapshot, "Failed to get translation.")
                )
            raise

        if generation != self._generation:
            logger.debug(f"Run {generation}: dropping translation from a superseded run")
            return self._snapshot

        self._publish(
            transitions.seed_run(
                self._snapshot,
                tokenize(text),
                output_tokens,
                translated.strip(),
                self.vectors,
                autoplay=self.config.autoplay,
            )
        )
        return self._snapshot

    def reset(self) -> SimulationSnapshot:
        """Return to Idle from any phase, invalidating pending timers and gateway results."""
        self._cancel_timers()
        self._generation += 1
        self.last_error = None
        self._publish(transitions.reset(self._snapshot, self.vectors, self._generation))
        return self._snapshot

    def toggle_pause(self) -> SimulationSnapshot:
        self._publish(transitions.toggle_pause(self._snapshot))
        return self._snapshot

    def step(self) -> bool:
        """Advance once by hand. Only allowed while paused in a playback phase.

        Returns:
            True if the advance was applied, False if the request was a no-op
        """
        if not self._snapshot.can_step:
            logger.debug(
                f"Ignoring manual step (phase={self._snapshot.phase.value}, "
                f"paused={self._snapshot.is_paused})"
            )
            return False
        self._advance()
        return True

    def set_speed(self, speed_ms: float) -> SimulationSnapshot:
        """Set the delay between automatic advances, clamped to the configured range."""
        self._publish(transitions.set_speed(self._snapshot, speed_ms, self.config))
        return self._snapshot

    def swap_languages(self) -> SimulationSnapshot:
        self._publish(transitions.swap_languages(self._snapshot))
        return self._snapshot

    def set_languages(
        self, source: "str | Language", target: "str | Language"
    ) -> SimulationSnapshot:
        pair = LanguagePair(source=Language.from_code(source), target=Language.from_code(target))
        self._publish(transitions.select_languages(self._snapshot, pair))
        return self._snapshot

    def close(self) -> None:
        """Stop all timers without publishing; the engine must not be used afterwards."""
        self._cancel_timers()
        self._generation += 1
        self._listeners.clear()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _advance(self) -> None:
        """The single advance path shared by timer ticks and manual steps."""
        if self._snapshot.phase is Phase.CONTEXT:
            self._arm_settle()
            return
        self._publish(transitions.advance(self._snapshot))

    def _on_tick(self, generation: int) -> None:
        if generation != self._generation:
            return
        self._tick_handle = None
        snapshot = self._snapshot
        if snapshot.is_paused or snapshot.phase not in PLAYBACK_PHASES:
            return
        self._advance()

    def _arm_settle(self) -> None:
        if self._settle_handle is not None:
            return
        generation = self._generation
        self._settle_handle = self.scheduler.call_later(
            self.config.context_settle_ms, lambda: self._on_settle(generation)
        )

    def _on_settle(self, generation: int) -> None:
        if generation != self._generation:
            return
        self._settle_handle = None
        self._publish(transitions.complete_context(self._snapshot))

    def _reschedule_tick(self) -> None:
        if self._tick_handle is not None:
            self._tick_handle.cancel()
            self._tick_handle = None
        snapshot = self._snapshot
        if snapshot.is_paused or snapshot.phase not in PLAYBACK_PHASES:
            return
        generation = self._generation
        self._tick_handle = self.scheduler.call_later(
            snapshot.animation_speed, lambda: self._on_tick(generation)
        )

    def _cancel_timers(self) -> None:
        for handle in (self._tick_handle, self._settle_handle):
            if handle is not None:
                handle.cancel()
        self._tick_handle = None
        self._settle_handle = None

    def _publish(self, snapshot: SimulationSnapshot) -> None:
        previous = self._snapshot
        if snapshot is previous:
            return
        self._snapshot = snapshot
        if previous.phase is not snapshot.phase:
            logger.debug(f"Phase: {previous.phase.value} -> {snapshot.phase.value}")
            if snapshot.phase is Phase.DONE:
                logger.info(f"Run {self._generation}: simulation complete")
        self._reschedule_tick()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                logger.error(f"Snapshot listener error: {e}")

    def _reject(self, error: SimulationError) -> SimulationSnapshot:
        logger.warning(f"Request rejected: {error}")
        self.last_error = error
        if self._snapshot.phase is Phase.IDLE:
            self._publish(transitions.reject(self._snapshot, str(error)))
        self._notify_error(error)
        return self._snapshot

    def _notify_error(self, error: SimulationError) -> None:
        if self.on_error:
            try:
                self.on_error(error)
            except Exception as e:
                logger.error(f"on_error callback error: {e}")

"""Pure transition functions of the playback state machine.

Each function takes the current snapshot and returns the next one; none of them
touch timers or the network. ``SimulationEngine`` decides when to call them.

    Idle -> Translating -> Encoding(xN) -> Context -> Decoding(xM) -> Done
      ^_____________________ reset (from anywhere) ___________________|
"""

from typing import Sequence

import attrs

from .config import SimulationConfig
from .errors import InvariantViolation
from .languages import LanguagePair
from .snapshot import Phase, SimulationSnapshot
from .vectors import VectorGenerator


def initial(config: SimulationConfig, vectors: VectorGenerator) -> SimulationSnapshot:
    return SimulationSnapshot(
        context_vector=vectors.vector(),
        animation_speed=config.default_speed_ms,
    )


def reset(
    snapshot: SimulationSnapshot, vectors: VectorGenerator, generation: int
) -> SimulationSnapshot:
    """Back to Idle: sequence data and text cleared, placeholder context vector, paused.

    Speed and language selection survive a reset.
    """
    return SimulationSnapshot(
        context_vector=vectors.vector(),
        animation_speed=snapshot.animation_speed,
        languages=snapshot.languages,
        generation=generation,
    )


def reject(snapshot: SimulationSnapshot, message: str) -> SimulationSnapshot:
    """Record a validation failure without leaving the current phase."""
    return attrs.evolve(snapshot, error=message)


def begin_translation(
    snapshot: SimulationSnapshot,
    text: str,
    languages: LanguagePair,
    vectors: VectorGenerator,
    generation: int,
) -> SimulationSnapshot:
    """Idle -> Translating."""
    if snapshot.phase is not Phase.IDLE:
        raise InvariantViolation(f"Cannot start translating from {snapshot.phase.value}")
    return SimulationSnapshot(
        phase=Phase.TRANSLATING,
        context_vector=vectors.vector(),
        is_paused=True,
        animation_speed=snapshot.animation_speed,
        input_text=text,
        languages=languages,
        generation=generation,
    )


def seed_run(
    snapshot: SimulationSnapshot,
    input_tokens: Sequence[str],
    output_tokens: Sequence[str],
    translated_text: str,
    vectors: VectorGenerator,
    autoplay: bool = False,
) -> SimulationSnapshot:
    """Translating -> Encoding at step 0, with one vector per token and a fresh context vector."""
    if snapshot.phase is not Phase.TRANSLATING:
        raise InvariantViolation(f"Cannot seed a run from {snapshot.phase.value}")
    return attrs.evolve(
        snapshot,
        phase=Phase.ENCODING,
        step=0,
        input_tokens=tuple(input_tokens),
        output_tokens=tuple(output_tokens),
        input_vectors=vectors.vectors_for(input_tokens),
        output_vectors=vectors.vectors_for(output_tokens),
        context_vector=vectors.vector(),
        translated_text=translated_text,
        is_paused=not autoplay,
        error="",
    )


def fail_translation(snapshot: SimulationSnapshot, message: str) -> SimulationSnapshot:
    """Translating -> Idle, carrying the failure message. Tokens are never populated."""
    if snapshot.phase is not Phase.TRANSLATING:
        raise InvariantViolation(f"Cannot fail a translation from {snapshot.phase.value}")
    return attrs.evolve(snapshot, phase=Phase.IDLE, step=0, is_paused=True, error=message)


def advance(snapshot: SimulationSnapshot) -> SimulationSnapshot:
    """One logical step of Encoding or Decoding.

    A sequence of length 1 completes on its first advance. Context is left
    unchanged: its exit is driven by ``complete_context`` after the settle delay.
    """
    phase = snapshot.phase
    if phase is Phase.ENCODING:
        if not snapshot.input_tokens:
            raise InvariantViolation("Advance requested with no input tokens")
        if snapshot.step < len(snapshot.input_tokens) - 1:
            return attrs.evolve(snapshot, step=snapshot.step + 1)
        return attrs.evolve(snapshot, phase=Phase.CONTEXT, step=0)
    if phase is Phase.DECODING:
        if not snapshot.output_tokens:
            raise InvariantViolation("Advance requested with no output tokens")
        if snapshot.step < len(snapshot.output_tokens) - 1:
            return attrs.evolve(snapshot, step=snapshot.step + 1)
        return attrs.evolve(snapshot, phase=Phase.DONE, is_paused=True)
    if phase is Phase.CONTEXT:
        return snapshot
    raise InvariantViolation(f"Advance requested in phase {phase.value}")


def complete_context(snapshot: SimulationSnapshot) -> SimulationSnapshot:
    """Context -> Decoding at step 0."""
    if snapshot.phase is not Phase.CONTEXT:
        raise InvariantViolation(f"Context settle fired in phase {snapshot.phase.value}")
    return attrs.evolve(snapshot, phase=Phase.DECODING, step=0)


def toggle_pause(snapshot: SimulationSnapshot) -> SimulationSnapshot:
    """Flip ``is_paused``; no effect while Translating or Done."""
    if not snapshot.can_toggle_pause:
        return snapshot
    return attrs.evolve(snapshot, is_paused=not snapshot.is_paused)


def set_speed(
    snapshot: SimulationSnapshot, speed_ms: float, config: SimulationConfig
) -> SimulationSnapshot:
    """Clamp and apply a new animation speed; no effect once Done."""
    if not snapshot.can_set_speed:
        return snapshot
    speed = config.clamp_speed(speed_ms)
    if speed == snapshot.animation_speed:
        return snapshot
    return attrs.evolve(snapshot, animation_speed=speed)


def select_languages(snapshot: SimulationSnapshot, languages: LanguagePair) -> SimulationSnapshot:
    """Change the language pair; ignored while a run is active."""
    if not snapshot.can_swap or languages == snapshot.languages:
        return snapshot
    return attrs.evolve(snapshot, languages=languages)


def swap_languages(snapshot: SimulationSnapshot) -> SimulationSnapshot:
    return select_languages(snapshot, snapshot.languages.swapped())

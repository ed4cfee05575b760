"""Immutable simulation state shared with renderers."""

from enum import Enum

import attrs

from .errors import InvariantViolation
from .languages import LanguagePair

Vector = tuple[float, ...]


class Phase(Enum):
    """Stage of the simulated encode/decode pipeline."""

    IDLE = "idle"
    TRANSLATING = "translating"
    ENCODING = "encoding"
    CONTEXT = "context"
    DECODING = "decoding"
    DONE = "done"


# Phases in which the animation timer may advance the simulation
PLAYBACK_PHASES = frozenset({Phase.ENCODING, Phase.CONTEXT, Phase.DECODING})

HIDDEN_TOKEN = "?"


def _check_alignment(instance: "SimulationSnapshot", attribute, value) -> None:
    if len(instance.input_vectors) != len(instance.input_tokens):
        raise InvariantViolation(
            f"{len(instance.input_vectors)} input vectors for {len(instance.input_tokens)} tokens"
        )
    if len(instance.output_vectors) != len(instance.output_tokens):
        raise InvariantViolation(
            f"{len(instance.output_vectors)} output vectors for {len(instance.output_tokens)} tokens"
        )


def _check_step(instance: "SimulationSnapshot", attribute, value: int) -> None:
    length = instance.active_length
    if length is None:
        return
    if length == 0:
        raise InvariantViolation(f"Phase {instance.phase.value} has no tokens to step through")
    if not 0 <= value <= length - 1:
        raise InvariantViolation(
            f"step {value} outside [0, {length - 1}] in phase {instance.phase.value}"
        )


@attrs.frozen
class SimulationSnapshot:
    """Complete state of the simulation at one point in time.

    Never mutated: every transition produces a new snapshot via ``attrs.evolve``.
    ``step`` only carries meaning in Encoding and Decoding.
    """

    phase: Phase = Phase.IDLE
    step: int = attrs.field(default=0, validator=_check_step)
    input_tokens: tuple[str, ...] = ()
    output_tokens: tuple[str, ...] = ()
    input_vectors: tuple[Vector, ...] = ()
    output_vectors: tuple[Vector, ...] = attrs.field(default=(), validator=_check_alignment)
    context_vector: Vector = ()
    is_paused: bool = True
    animation_speed: int = 1200
    input_text: str = ""
    translated_text: str = ""
    languages: LanguagePair = attrs.Factory(LanguagePair)
    error: str = ""
    generation: int = 0

    @property
    def active_length(self) -> int | None:
        """Length of the sequence ``step`` indexes into, or None outside Encoding/Decoding."""
        if self.phase is Phase.ENCODING:
            return len(self.input_tokens)
        if self.phase is Phase.DECODING:
            return len(self.output_tokens)
        return None

    @property
    def is_simulating(self) -> bool:
        """A run is in progress: inputs, language selection and swap are locked."""
        return self.phase not in (Phase.IDLE, Phase.DONE)

    @property
    def show_controls(self) -> bool:
        return self.phase not in (Phase.IDLE, Phase.TRANSLATING)

    @property
    def show_context(self) -> bool:
        return self.phase in (Phase.CONTEXT, Phase.DECODING, Phase.DONE)

    @property
    def can_start(self) -> bool:
        return self.phase is Phase.IDLE

    @property
    def can_toggle_pause(self) -> bool:
        return self.phase not in (Phase.TRANSLATING, Phase.DONE)

    @property
    def can_step(self) -> bool:
        return self.is_paused and self.phase in PLAYBACK_PHASES

    @property
    def can_swap(self) -> bool:
        return not self.is_simulating

    @property
    def can_set_speed(self) -> bool:
        return self.phase is not Phase.DONE

    @property
    def active_input_index(self) -> int | None:
        return self.step if self.phase is Phase.ENCODING else None

    @property
    def active_output_index(self) -> int | None:
        return self.step if self.phase is Phase.DECODING else None

    @property
    def revealed_output_tokens(self) -> tuple[str, ...]:
        """Output tokens decoded so far; the rest are masked with ``?``."""
        if self.phase is Phase.DONE:
            return self.output_tokens
        if self.phase is Phase.DECODING:
            return tuple(
                token if i <= self.step else HIDDEN_TOKEN for i, token in enumerate(self.output_tokens)
            )
        return tuple(HIDDEN_TOKEN for _ in self.output_tokens)

    @property
    def description(self) -> str:
        if self.phase is Phase.ENCODING:
            return f"Encoding Token {self.step + 1}/{len(self.input_tokens)}"
        if self.phase is Phase.DECODING:
            return f"Decoding Token {self.step + 1}/{len(self.output_tokens)}"
        if self.phase is Phase.CONTEXT:
            return "Generating Context Vector"
        if self.phase is Phase.DONE:
            return "Translation Complete"
        if self.phase is Phase.TRANSLATING:
            return "Calling Translation API"
        return "Awaiting Input"

    def to_dict(self) -> dict:
        """JSON-ready view for renderers."""
        return {
            "phase": self.phase.value,
            "step": self.step,
            "description": self.description,
            "input_text": self.input_text,
            "translated_text": self.translated_text if self.phase is Phase.DONE else "",
            "languages": self.languages.to_dict(),
            "input_tokens": list(self.input_tokens),
            "output_tokens": list(self.revealed_output_tokens),
            "input_vectors": [list(v) for v in self.input_vectors],
            "output_vectors": [list(v) for v in self.output_vectors],
            "context_vector": list(self.context_vector) if self.show_context else None,
            "active_input_index": self.active_input_index,
            "active_output_index": self.active_output_index,
            "is_paused": self.is_paused,
            "animation_speed": self.animation_speed,
            "error": self.error,
            "controls": {
                "start": self.can_start,
                "toggle_pause": self.can_toggle_pause,
                "step": self.can_step,
                "swap": self.can_swap,
                "speed": self.can_set_speed,
                "visible": self.show_controls,
            },
        }

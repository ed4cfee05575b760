"""Tests for SimulationSnapshot invariants and renderer helpers."""

import attrs
import pytest

from seq2seq_viz import InvariantViolation, Phase, SimulationSnapshot

VEC = (0.5,) * 25


def running(phase=Phase.ENCODING, step=0, **kwargs):
    return SimulationSnapshot(
        phase=phase,
        step=step,
        input_tokens=("how", "are", "you"),
        output_tokens=("आप", "कैसे", "हैं"),
        input_vectors=(VEC,) * 3,
        output_vectors=(VEC,) * 3,
        context_vector=VEC,
        **kwargs,
    )


class TestInvariants:
    """Snapshots refuse to exist in an inconsistent state."""

    def test_frozen(self):
        """Test that fields cannot be assigned after construction."""
        snapshot = SimulationSnapshot()
        with pytest.raises(attrs.exceptions.FrozenInstanceError):
            snapshot.step = 3

    def test_vector_token_mismatch(self):
        """Test that input vectors must align with input tokens."""
        with pytest.raises(InvariantViolation):
            SimulationSnapshot(input_tokens=("a", "b"), input_vectors=(VEC,))

    def test_output_vector_mismatch(self):
        """Test that output vectors must align with output tokens."""
        with pytest.raises(InvariantViolation):
            SimulationSnapshot(output_tokens=("a",), output_vectors=())

    @pytest.mark.parametrize("phase", [Phase.ENCODING, Phase.DECODING])
    def test_step_out_of_range(self, phase):
        """Test that step must index into the active sequence."""
        with pytest.raises(InvariantViolation):
            running(phase=phase, step=3)

    def test_negative_step(self):
        """Test that a negative step is rejected."""
        with pytest.raises(InvariantViolation):
            running(step=-1)

    def test_encoding_without_tokens(self):
        """Test that Encoding requires a non-empty input sequence."""
        with pytest.raises(InvariantViolation):
            SimulationSnapshot(phase=Phase.ENCODING)

    @pytest.mark.parametrize("phase", [Phase.IDLE, Phase.TRANSLATING, Phase.CONTEXT, Phase.DONE])
    def test_step_ignored_outside_encoding_decoding(self, phase):
        """Test that step is unchecked outside Encoding and Decoding."""
        assert running(phase=phase, step=42).step == 42

    def test_evolve_revalidates(self):
        """Test that attrs.evolve runs the same validators."""
        with pytest.raises(InvariantViolation):
            attrs.evolve(running(), step=5)


class TestDescription:
    """Tests for the phase description shown above the visualization."""

    @pytest.mark.parametrize(
        "phase,step,expected",
        [
            (Phase.IDLE, 0, "Awaiting Input"),
            (Phase.TRANSLATING, 0, "Calling Translation API"),
            (Phase.ENCODING, 1, "Encoding Token 2/3"),
            (Phase.CONTEXT, 0, "Generating Context Vector"),
            (Phase.DECODING, 2, "Decoding Token 3/3"),
            (Phase.DONE, 0, "Translation Complete"),
        ],
    )
    def test_description(self, phase, step, expected):
        """Test the description for each phase."""
        assert running(phase=phase, step=step).description == expected


class TestRendererHelpers:
    """Tests for the flags and views renderers read."""

    def test_revealed_output_tokens_while_decoding(self):
        """Test that tokens after the current step are masked."""
        assert running(Phase.DECODING, step=1).revealed_output_tokens == ("आप", "कैसे", "?")

    def test_revealed_output_tokens_hidden_before_decoding(self):
        """Test that every output token is masked before Decoding."""
        assert running(Phase.ENCODING).revealed_output_tokens == ("?", "?", "?")

    def test_revealed_output_tokens_done(self):
        """Test that Done reveals the whole output."""
        assert running(Phase.DONE).revealed_output_tokens == ("आप", "कैसे", "हैं")

    def test_active_indices(self):
        """Test which side is highlighted in each phase."""
        assert running(Phase.ENCODING, 2).active_input_index == 2
        assert running(Phase.ENCODING, 2).active_output_index is None
        assert running(Phase.DECODING, 1).active_output_index == 1
        assert running(Phase.CONTEXT).active_input_index is None

    @pytest.mark.parametrize(
        "phase,simulating,controls,context",
        [
            (Phase.IDLE, False, False, False),
            (Phase.TRANSLATING, True, False, False),
            (Phase.ENCODING, True, True, False),
            (Phase.CONTEXT, True, True, True),
            (Phase.DECODING, True, True, True),
            (Phase.DONE, False, True, True),
        ],
    )
    def test_phase_flags(self, phase, simulating, controls, context):
        """Test the visibility and lock flags per phase."""
        snapshot = running(phase=phase)
        assert snapshot.is_simulating is simulating
        assert snapshot.can_swap is not simulating
        assert snapshot.show_controls is controls
        assert snapshot.show_context is context

    def test_can_step_requires_pause(self):
        """Test that manual stepping needs a paused playback phase."""
        assert running(Phase.ENCODING, is_paused=True).can_step
        assert not running(Phase.ENCODING, is_paused=False).can_step
        assert not running(Phase.DONE, is_paused=True).can_step

    def test_can_set_speed_disabled_when_done(self):
        """Test that the speed control is disabled only in Done."""
        assert running(Phase.DECODING).can_set_speed
        assert not running(Phase.DONE).can_set_speed

    def test_to_dict(self):
        """Test the JSON view of a decoding snapshot."""
        data = running(Phase.DECODING, step=0, is_paused=False, translated_text="आप कैसे हैं").to_dict()
        assert data["phase"] == "decoding"
        assert data["description"] == "Decoding Token 1/3"
        assert data["output_tokens"] == ["आप", "?", "?"]
        assert data["translated_text"] == ""
        assert data["context_vector"] == list(VEC)
        assert data["active_output_index"] == 0
        assert data["controls"]["step"] is False
        assert data["languages"]["target"] == "hi"

    def test_to_dict_hides_context_before_context_phase(self):
        """Test that the context vector is withheld during Encoding."""
        assert running(Phase.ENCODING).to_dict()["context_vector"] is None

"""Tests for the illustrative vector generator."""

from seq2seq_viz import VectorGenerator, generate_vector
from seq2seq_viz.vectors import VECTOR_SIZE


class TestGenerateVector:
    """Tests for generate_vector()."""

    def test_default_length(self):
        """Test that vectors default to 25 values."""
        assert len(generate_vector()) == VECTOR_SIZE == 25

    def test_custom_length(self):
        """Test that size is honored."""
        assert len(generate_vector(7)) == 7

    def test_values_in_unit_interval(self):
        """Test that every value lies in [0, 1)."""
        vector = generate_vector(1000)
        assert all(0.0 <= v < 1.0 for v in vector)

    def test_returns_tuple_of_floats(self):
        """Test that vectors are immutable tuples of plain floats."""
        vector = generate_vector()
        assert isinstance(vector, tuple)
        assert all(isinstance(v, float) for v in vector)

    def test_zero_length(self):
        """Test that size 0 yields an empty tuple."""
        assert generate_vector(0) == ()


class TestVectorGenerator:
    """Tests for the seeded VectorGenerator."""

    def test_same_seed_same_vectors(self):
        """Test that equal seeds give equal sequences."""
        a = VectorGenerator(seed=42)
        b = VectorGenerator(seed=42)
        assert a.vector() == b.vector()
        assert a.vectors_for(["x", "y"]) == b.vectors_for(["x", "y"])

    def test_successive_vectors_differ(self):
        """Test that consecutive draws differ."""
        gen = VectorGenerator(seed=1)
        assert gen.vector() != gen.vector()

    def test_vectors_for_aligns_with_tokens(self):
        """Test that vectors_for returns one vector per token."""
        gen = VectorGenerator(size=5, seed=0)
        vectors = gen.vectors_for(["how", "are", "you"])
        assert len(vectors) == 3
        assert all(len(v) == 5 for v in vectors)

    def test_vectors_for_empty(self):
        """Test that no tokens means no vectors."""
        assert VectorGenerator(seed=0).vectors_for([]) == ()

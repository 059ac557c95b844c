"""Mock random sources and data builders for deterministic testing."""

from .mock_random import FixedSequenceRandom, ConstantRandom
from .factories import make_point

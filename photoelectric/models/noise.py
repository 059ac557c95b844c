"""
Noise Model

Adds bounded uniform noise to ideal photocurrent samples. The noise
amplitude scales with max(0.01 nA, ideal current), so even a dark reading
fluctuates slightly, and the result is clamped at zero because a
photocurrent cannot be negative.
"""

from typing import Optional, Dict

import numpy as np

from ..config.settings import PHYSICS_MODEL_CONFIG


def apply_noise(
    ideal_current: float,
    noise_level: float,
    rng: np.random.Generator,
    noise_floor: float = PHYSICS_MODEL_CONFIG["noise_floor_na"],
) -> float:
    """
    Perturb one ideal current sample.

    Args:
        ideal_current: Noiseless current (nA)
        noise_level: Relative amplitude in [0, 1)
        rng: Random source; exactly one uniform draw is consumed
        noise_floor: Minimum current used to scale the noise (nA)

    Returns:
        Noisy current, never negative
    """
    u = rng.random()
    perturbation = (u - 0.5) * 2 * noise_level * max(noise_floor, ideal_current)
    return max(0.0, ideal_current + perturbation)


class NoiseModel:
    """
    Seedable noise source for measurement sampling.

    The random generator is always injected or created from an explicit
    seed so repeated runs with the same seed give identical readings.
    """

    def __init__(
        self,
        noise_level: float,
        rng: Optional[np.random.Generator] = None,
        config: Optional[Dict] = None,
    ):
        """
        Initialize the noise model.

        Args:
            noise_level: Relative noise amplitude in [0, 1)
            rng: numpy Generator (a fresh unseeded one if None)
            config: Optional model coefficients (defaults to PHYSICS_MODEL_CONFIG)
        """
        self.noise_level = noise_level
        self.rng = rng if rng is not None else np.random.default_rng()
        cfg = config or PHYSICS_MODEL_CONFIG
        self.noise_floor = cfg["noise_floor_na"]

    @classmethod
    def from_seed(cls, noise_level: float, seed: Optional[int] = None,
                  config: Optional[Dict] = None) -> "NoiseModel":
        """Create a noise model with a seeded numpy Generator."""
        return cls(noise_level, np.random.default_rng(seed), config)

    def apply(self, ideal_current: float) -> float:
        """Return one noisy reading of ideal_current."""
        return apply_noise(ideal_current, self.noise_level, self.rng, self.noise_floor)

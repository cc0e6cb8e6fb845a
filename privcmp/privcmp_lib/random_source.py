"""Sources of randomness for key generation, encryption and blinding.

Every sampler returns an int64 numpy array of the requested shape. The BGV
backend converts samples to Python integers before doing big-modulus
arithmetic, and plaintext-side code converts them to jax arrays.
"""

import math
import random
from typing import Callable, Optional

import numpy as np


def _shape_generator(fn: Callable[[], int], shape: tuple[int, ...]) -> np.ndarray:
  """Fills an array of the given shape by calling fn once per entry."""
  if any(dim < 0 for dim in shape):
    raise ValueError(f'Invalid shape {shape}.')
  size = math.prod(shape)
  return np.array([fn() for _ in range(size)], dtype=np.int64).reshape(shape)


class RandomSource:
  """An interface for a source of randomness.

  `uniform` samples from the half-open range [lo, hi) given by `bounds`, or by
  the `uniform_bounds` set at construction. `rounded_normal` samples a
  centered Gaussian with standard deviation `std` (default `normal_std`) and
  rounds to the nearest integer. `sk_uniform` samples secret key bits.
  """

  def __init__(
      self,
      uniform_bounds: tuple[int, int] = (0, 2**31),
      normal_std: float = 3.2,
  ) -> None:
    self.uniform_bounds = uniform_bounds
    self.normal_std = normal_std

  def uniform(
      self,
      shape: tuple[int, ...],
      bounds: Optional[tuple[int, int]] = None,
  ) -> np.ndarray:
    lo, hi = bounds if bounds is not None else self.uniform_bounds
    if hi <= lo:
      raise ValueError(f'Empty sampling range [{lo}, {hi}).')
    return _shape_generator(lambda: self._uniform_int(lo, hi), shape)

  def rounded_normal(
      self, shape: tuple[int, ...], std: Optional[float] = None
  ) -> np.ndarray:
    std = self.normal_std if std is None else std
    return _shape_generator(lambda: round(self._normal(std)), shape)

  def sk_uniform(self, shape: tuple[int, ...]) -> np.ndarray:
    return self.uniform(shape, bounds=(0, 2))

  def _uniform_int(self, lo: int, hi: int) -> int:
    raise NotImplementedError

  def _normal(self, std: float) -> float:
    raise NotImplementedError


class SystemRandomSource(RandomSource):
  """A cryptographically secure random source backed by the OS."""

  def __init__(
      self,
      uniform_bounds: tuple[int, int] = (0, 2**31),
      normal_std: float = 3.2,
  ) -> None:
    super().__init__(uniform_bounds, normal_std)
    self._prng = random.SystemRandom()

  def _uniform_int(self, lo: int, hi: int) -> int:
    return self._prng.randrange(lo, hi)

  def _normal(self, std: float) -> float:
    return self._prng.normalvariate(0, std) if std else 0.0


class PseudorandomSource(RandomSource):
  """A seeded, reproducible random source. Not for production keys."""

  def __init__(
      self,
      uniform_bounds: tuple[int, int] = (0, 2**31),
      normal_std: float = 3.2,
      seed: Optional[int] = None,
  ) -> None:
    super().__init__(uniform_bounds, normal_std)
    self._generator = np.random.default_rng(seed)

  def uniform(
      self,
      shape: tuple[int, ...],
      bounds: Optional[tuple[int, int]] = None,
  ) -> np.ndarray:
    lo, hi = bounds if bounds is not None else self.uniform_bounds
    if hi <= lo:
      raise ValueError(f'Empty sampling range [{lo}, {hi}).')
    return self._generator.integers(lo, hi, size=shape, dtype=np.int64)

  def rounded_normal(
      self, shape: tuple[int, ...], std: Optional[float] = None
  ) -> np.ndarray:
    std = self.normal_std if std is None else std
    samples = self._generator.normal(0.0, std, size=shape)
    return np.rint(samples).astype(np.int64)


class ZeroRng(RandomSource):
  """Produces zero for every sample. Used for noiseless encryptions."""

  def _uniform_int(self, lo: int, hi: int) -> int:
    return lo

  def _normal(self, std: float) -> float:
    return 0.0


ALL_RNGS = [SystemRandomSource, PseudorandomSource, ZeroRng]

"""Plaintext ring elements in Z[X] / (X^N + 1)."""

import dataclasses
from typing import Optional

import jax.numpy as jnp
from privcmp.privcmp_lib import arithmetic_context
from privcmp.privcmp_lib import random_source


@dataclasses.dataclass(frozen=True)
class RingElement:
  """A polynomial in Z[X] / (X^N + 1) with small integer coefficients.

  Coefficients are plain integers, possibly negative, until `reduce` maps them
  into [0, modulus) for the modulus of an arithmetic context. Ring elements
  are immutable; methods that change a coefficient return a new element.
  """

  # the coefficients of the polynomial, starting from lowest degree to highest.
  coeffs: jnp.ndarray

  @property
  def degree(self) -> int:
    """The ring degree N, i.e. the number of coefficients."""
    return self.coeffs.shape[0]

  def coeff(self, index: int) -> int:
    return int(self.coeffs[index])

  def with_coeff(self, index: int, value: int) -> 'RingElement':
    """Returns a copy of this element with coefficient `index` set to value."""
    if not 0 <= index < self.degree:
      raise IndexError(f'Coefficient {index} out of range [0, {self.degree}).')
    return RingElement(self.coeffs.at[index].set(value))

  def tolist(self) -> list[int]:
    return [int(c) for c in self.coeffs]

  def _check_compatible(self, other: 'RingElement') -> None:
    if self.degree != other.degree:
      raise ValueError(
          f'`degree` must be the same: self = {self.degree}, other ='
          f' {other.degree}'
      )

  def __add__(self, other: 'RingElement') -> 'RingElement':
    self._check_compatible(other)
    return RingElement(self.coeffs + other.coeffs)

  def __neg__(self) -> 'RingElement':
    return RingElement(-self.coeffs)

  def __mul__(self, scalar: int) -> 'RingElement':
    """Scalar multiplication."""
    if not isinstance(scalar, int):
      return NotImplemented
    return RingElement(self.coeffs * jnp.int32(scalar))

  def __rmul__(self, scalar: int) -> 'RingElement':
    return self * scalar

  def __eq__(self, other: object) -> bool:
    if not isinstance(other, RingElement):
      return NotImplemented
    return self.degree == other.degree and bool(
        jnp.all(self.coeffs == other.coeffs)
    )

  def __str__(self) -> str:
    # this does not need to be fast because it will only be used in development.
    s = ' + '.join(
        f'{coeff} x^{power}'
        for (power, coeff) in enumerate(self.tolist())
        if coeff != 0
    )
    return s if s else '0'


def from_coefficients(coeffs) -> RingElement:
  return RingElement(jnp.asarray(coeffs, dtype=jnp.int32))


def zero(degree: int) -> RingElement:
  return RingElement(jnp.zeros(degree, dtype=jnp.int32))


def constant(value: int, degree: int) -> RingElement:
  """The constant polynomial `value`."""
  return zero(degree).with_coeff(0, value)


def monomial(exponent: int, degree: int, coeff: int = 1) -> RingElement:
  """The monomial coeff * X^exponent, for 0 <= exponent < degree."""
  return zero(degree).with_coeff(exponent, coeff)


def ones(degree: int) -> RingElement:
  """The polynomial 1 + X + ... + X^{degree - 1}."""
  return RingElement(jnp.ones(degree, dtype=jnp.int32))


def reduce(
    element: RingElement,
    arith: Optional[arithmetic_context.ArithmeticContext] = None,
) -> RingElement:
  """Reduces every coefficient into [0, modulus) for the active modulus."""
  arith = arith or arithmetic_context.DEFAULT_CONTEXT
  modulus = arith.require_modulus()
  return RingElement(jnp.mod(element.coeffs, modulus).astype(jnp.int32))


def random_element(
    degree: int,
    prg: random_source.RandomSource,
    arith: Optional[arithmetic_context.ArithmeticContext] = None,
) -> RingElement:
  """Samples coefficients uniformly from [0, modulus) for the active modulus."""
  arith = arith or arithmetic_context.DEFAULT_CONTEXT
  modulus = arith.require_modulus()
  samples = prg.uniform(shape=(degree,), bounds=(0, modulus))
  return from_coefficients(samples)

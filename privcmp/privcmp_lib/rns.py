"""Polynomials of Z_Q[X] / (X^N + 1) kept as residues modulo each prime of Q.

Q is a product of primes q_i with 2N | q_i - 1, so each Z_{q_i}[X] / (X^N + 1)
has a negacyclic NTT and products can be taken point-wise. Every prime row of
an `RnsPolynomial` is a plain list of Python ints; the moduli used by the BGV
backend are around 2^30 and products of two residues never need more than
Python's arbitrary precision integers.
"""

import dataclasses
import operator
from typing import Callable

from privcmp.privcmp_lib import random_source
from privcmp.privcmp_lib import rns_utils


def _root_of_unity(order: int, q: int) -> int:
  """Returns a primitive `order`-th root of unity mod the prime q.

  For a power of two `order` dividing q - 1, w = g^((q-1)/order) has order
  dividing `order`, and it has exactly that order iff w^(order/2) = -1.
  """
  if not rns_utils.is_power_of_two(order):
    raise ValueError(f'`order` must be a power of two, got {order}.')
  if (q - 1) % order:
    raise ValueError(f'{order} does not divide q - 1 = {q - 1}.')
  cofactor = (q - 1) // order
  for g in range(2, q):
    w = pow(g, cofactor, q)
    if pow(w, order // 2, q) == q - 1:
      return w
  raise ValueError(f'No primitive {order}-th root of unity mod {q}.')


def _powers(base: int, count: int, q: int) -> list[int]:
  """Returns [base^0, ..., base^(count-1)] mod q."""
  result = []
  value = 1
  for _ in range(count):
    result.append(value)
    value = value * base % q
  return result


@dataclasses.dataclass
class Ntt:
  """The negacyclic NTT over Z_q[X] / (X^n + 1).

  `forward` evaluates a polynomial at psi^(2k+1) for k in [0, n), psi being a
  primitive 2n-th root of unity. Scaling coefficient j by psi^j first turns
  the negacyclic problem into a cyclic NTT of size n with omega = psi^2, so
  both directions are a twist plus a radix-2 cyclic transform. Both work in
  place on a list of residues mod q.
  """

  n: int
  q: int

  # psi^j, and n^{-1} * psi^{-j}, for j in [0, n).
  twist: list[int] = dataclasses.field(init=False)
  untwist: list[int] = dataclasses.field(init=False)

  # omega^k and omega^{-k} for k in [0, n/2).
  twiddles: list[int] = dataclasses.field(init=False)
  inverse_twiddles: list[int] = dataclasses.field(init=False)

  def __post_init__(self):
    if not rns_utils.is_power_of_two(self.n):
      raise ValueError(f'`n` must be a power of two, got {self.n}.')
    if (self.q - 1) % (2 * self.n):
      raise ValueError(f'2n = {2 * self.n} must divide q - 1 = {self.q - 1}.')
    q = self.q
    psi = _root_of_unity(2 * self.n, q)
    psi_inv = rns_utils.inverse_mod(psi, q)
    n_inv = rns_utils.inverse_mod(self.n, q)
    self.twist = _powers(psi, self.n, q)
    self.untwist = [n_inv * p % q for p in _powers(psi_inv, self.n, q)]
    self.twiddles = _powers(psi * psi % q, self.n // 2, q)
    self.inverse_twiddles = _powers(psi_inv * psi_inv % q, self.n // 2, q)

  def forward(self, coeffs: list[int]) -> None:
    """Replaces coefficients by evaluations at psi^(2k+1), in place."""
    for j, factor in enumerate(self.twist):
      coeffs[j] = coeffs[j] * factor % self.q
    self._cyclic_ntt(coeffs, self.twiddles)

  def backward(self, coeffs: list[int]) -> None:
    """Inverse of `forward`, in place."""
    self._cyclic_ntt(coeffs, self.inverse_twiddles)
    for j, factor in enumerate(self.untwist):
      coeffs[j] = coeffs[j] * factor % self.q

  def _cyclic_ntt(self, values: list[int], twiddles: list[int]) -> None:
    """Decimation-in-time radix-2 NTT; natural order in and out."""
    n = len(values)
    q = self.q
    rns_utils.bit_reversal_array(values)
    block = 2
    while block <= n:
      half = block // 2
      stride = n // block
      for start in range(0, n, block):
        for j in range(half):
          lo = start + j
          hi = lo + half
          v = values[hi] * twiddles[j * stride] % q
          values[lo], values[hi] = (values[lo] + v) % q, (values[lo] - v) % q
      block *= 2


@dataclasses.dataclass
class RnsParams:
  """The ring Z_Q[X] / (X^N + 1) together with one NTT per prime of Q."""

  # N
  degree: int

  # the primes q_i, Q = prod q_i
  moduli: list[int]

  ntt_params: list[Ntt] = dataclasses.field(init=False)

  def __post_init__(self):
    self.ntt_params = [Ntt(self.degree, q) for q in self.moduli]


@dataclasses.dataclass
class RnsPolynomial:
  """An element of Z_Q[X] / (X^N + 1), one row of residues per prime.

  Rows hold either coefficients or NTT evaluations, as told by `is_ntt`.
  Addition, subtraction, negation and `scale` work in both forms; products
  need the NTT form and `automorphism` needs the coefficient form. Arithmetic
  returns new polynomials, only the form conversions work in place.
  """

  degree: int
  moduli: list[int]
  coeffs: list[list[int]]
  is_ntt: bool = False

  def to_ntt_form(self, ntt_params: list[Ntt]) -> None:
    if self.is_ntt:
      return
    for ntt, row in zip(ntt_params, self.coeffs):
      ntt.forward(row)
    self.is_ntt = True

  def to_coeffs_form(self, ntt_params: list[Ntt]) -> None:
    if not self.is_ntt:
      return
    for ntt, row in zip(ntt_params, self.coeffs):
      ntt.backward(row)
    self.is_ntt = False

  def copy(self) -> 'RnsPolynomial':
    return dataclasses.replace(self, coeffs=[list(row) for row in self.coeffs])

  def _check_compatible(self, other: 'RnsPolynomial') -> None:
    if self.degree != other.degree or list(self.moduli) != list(other.moduli):
      raise ValueError(
          f'Cannot combine a polynomial of degree {self.degree} mod'
          f' {self.moduli} with one of degree {other.degree} mod'
          f' {other.moduli}.'
      )
    if self.is_ntt != other.is_ntt:
      raise ValueError(
          'Both polynomials must be in the same form, got is_ntt ='
          f' {self.is_ntt} and {other.is_ntt}.'
      )

  def _map(self, op: Callable[[int], int]) -> 'RnsPolynomial':
    coeffs = [
        [op(c) % q for c in row] for row, q in zip(self.coeffs, self.moduli)
    ]
    return dataclasses.replace(self, coeffs=coeffs)

  def _zip_with(
      self, other: 'RnsPolynomial', op: Callable[[int, int], int]
  ) -> 'RnsPolynomial':
    self._check_compatible(other)
    coeffs = [
        [op(x, y) % q for x, y in zip(row, other_row)]
        for row, other_row, q in zip(self.coeffs, other.coeffs, self.moduli)
    ]
    return dataclasses.replace(self, coeffs=coeffs)

  def __neg__(self) -> 'RnsPolynomial':
    return self._map(operator.neg)

  def __add__(self, other: 'RnsPolynomial') -> 'RnsPolynomial':
    return self._zip_with(other, operator.add)

  def __sub__(self, other: 'RnsPolynomial') -> 'RnsPolynomial':
    return self._zip_with(other, operator.sub)

  def __mul__(self, other: 'RnsPolynomial') -> 'RnsPolynomial':
    """Negacyclic product, computed point-wise; both must be in NTT form."""
    if not (self.is_ntt and other.is_ntt):
      raise ValueError('Both polynomials must be in the NTT form.')
    return self._zip_with(other, operator.mul)

  def scale(self, scalar: int) -> 'RnsPolynomial':
    """Multiplies by an integer, in either form."""
    return self._map(lambda c: c * scalar)

  def automorphism(self, exponent: int) -> 'RnsPolynomial':
    """Returns the image under X -> X^exponent, for odd exponent.

    Coefficient j moves to position j * exponent mod 2N. Positions in [N, 2N)
    fold back to [0, N) with a sign flip, since X^N = -1.

    Args:
      exponent: an odd integer; it is a unit mod 2N.

    Returns:
      The mapped polynomial, in the coefficient form.

    Raises:
      ValueError: if the polynomial is in the NTT form or exponent is even.
    """
    if self.is_ntt:
      raise ValueError('The polynomial must be in the coefficient form.')
    if exponent % 2 == 0:
      raise ValueError(f'`exponent` must be odd, got {exponent}.')
    n = self.degree
    coeffs = []
    for row, q in zip(self.coeffs, self.moduli):
      mapped = [0] * n
      for j, c in enumerate(row):
        position = j * exponent % (2 * n)
        if position < n:
          mapped[position] = c
        else:
          mapped[position - n] = -c % q
      coeffs.append(mapped)
    return dataclasses.replace(self, coeffs=coeffs)


def gen_rns_polynomial(
    degree: int, coeffs: list[int], moduli: list[int]
) -> RnsPolynomial:
  """Returns the coefficient-form polynomial with the given integer coeffs."""
  rows = [[c % q for c in coeffs] for q in moduli]
  return RnsPolynomial(degree, moduli, rows)


def crt_reconstruct(coeffs_qs: list[list[int]], qs: list[int]) -> list[int]:
  """Recombines residue rows into integers via the CRT.

  Args:
    coeffs_qs: one row of residues per prime, all rows of the same length.
    qs: the primes q_i.

  Returns:
    One integer per column, centered in (-Q/2, Q/2] for Q = prod q_i.
  """
  big_q = rns_utils.product(qs)
  # e_i = (Q/q_i) * [(Q/q_i)^{-1}]_{q_i} is 1 mod q_i and 0 mod the others.
  basis = []
  for qi in qs:
    q_hat = big_q // qi
    basis.append(q_hat * rns_utils.inverse_mod(q_hat, qi))
  return [
      rns_utils.centered(sum(e * r for e, r in zip(basis, column)), big_q)
      for column in zip(*coeffs_qs)
  ]


def gen_uniform_polynomial(
    rns_params: RnsParams, prg: random_source.RandomSource
) -> RnsPolynomial:
  """Samples a polynomial uniformly from Z_Q[X] / (X^N + 1)."""
  rows = [
      [int(c) for c in prg.uniform((rns_params.degree,), bounds=(0, q))]
      for q in rns_params.moduli
  ]
  return RnsPolynomial(rns_params.degree, rns_params.moduli, rows)


def gen_gaussian_polynomial(
    rns_params: RnsParams, prg: random_source.RandomSource, sigma: float
) -> RnsPolynomial:
  """Samples small coefficients from a rounded Gaussian of width `sigma`."""
  coeffs = [int(c) for c in prg.rounded_normal((rns_params.degree,), sigma)]
  return gen_rns_polynomial(rns_params.degree, coeffs, rns_params.moduli)


def gen_binary_polynomial(
    rns_params: RnsParams, prg: random_source.RandomSource
) -> RnsPolynomial:
  coeffs = [int(c) for c in prg.sk_uniform((rns_params.degree,))]
  return gen_rns_polynomial(rns_params.degree, coeffs, rns_params.moduli)

"""API for private comparisons of degree-encoded integers.

The protocols in this package work with any backend satisfying
`privcmp_lib.interfaces`; this module wires them to the reference BGV backend.
"""

from typing import Optional, Sequence, Union

from privcmp.privcmp_compare import comparison_spec
from privcmp.privcmp_compare import count_less_than as count_less_than_lib
from privcmp.privcmp_compare import degree_encoding
from privcmp.privcmp_compare import degree_negation
from privcmp.privcmp_compare import equality
from privcmp.privcmp_compare import greater_than as greater_than_lib
from privcmp.privcmp_lib import arithmetic_context
from privcmp.privcmp_lib import bgv
from privcmp.privcmp_lib import parameters
from privcmp.privcmp_lib import random_source

Parameters = parameters.SchemeParameters
ComparisonSpec = comparison_spec.ComparisonSpec
create_comparison_spec = comparison_spec.create_comparison_spec


class ClientKeySet:
  """A secret key with the degree negation key installed on its public key."""

  @property
  def secret_key(self) -> bgv.BgvSecretKey:
    return self._secret_key

  @property
  def public_key(self) -> bgv.BgvPublicKey:
    return self._secret_key.public_key

  def __init__(
      self,
      params: Parameters,
      prg: Optional[random_source.RandomSource] = None,
  ) -> None:
    self._secret_key = bgv.gen_key(params, prg)
    degree_negation.install_negation_key(self._secret_key)


def encrypt(value: int, client_key_set: ClientKeySet) -> bgv.BgvCiphertext:
  """Encrypts X^value under the client's secret key."""
  return degree_encoding.encrypt_in_degree(value, client_key_set.secret_key)


def decrypt(
    ciphertext: bgv.BgvCiphertext, client_key_set: ClientKeySet
) -> int:
  """Decrypts a comparison result, returning its constant coefficient."""
  return client_key_set.secret_key.decrypt(ciphertext).coeff(0)


def greater_than(
    lhs: bgv.BgvCiphertext,
    rhs: Union[bgv.BgvCiphertext, int],
    params: Parameters,
    spec: Optional[ComparisonSpec] = None,
    prg: Optional[random_source.RandomSource] = None,
    arith: Optional[arithmetic_context.ArithmeticContext] = None,
) -> bgv.BgvCiphertext:
  """Computes lhs > rhs; see `greater_than.greater_than`."""
  return greater_than_lib.greater_than(
      lhs, rhs, params, spec=spec, prg=prg, arith=arith
  )


def count_less_than(
    lhs: bgv.BgvCiphertext,
    others: Sequence[bgv.BgvCiphertext],
    params: Parameters,
) -> bgv.BgvCiphertext:
  """Counts the values in `others` below lhs."""
  return count_less_than_lib.count_less_than(lhs, others, params)


def equal(
    lhs: bgv.BgvCiphertext,
    rhs: bgv.BgvCiphertext,
    params: Parameters,
    randomize: bool = True,
    prg: Optional[random_source.RandomSource] = None,
    arith: Optional[arithmetic_context.ArithmeticContext] = None,
) -> bgv.BgvCiphertext:
  """Computes lhs != rhs as 0 (equal) or 1 (not equal)."""
  return equality.equality_test(
      lhs, rhs, params, randomize=randomize, prg=prg, arith=arith
  )

"""Encoding integers in the degree of a monomial.

An integer v is represented by the ring element X^v, so that multiplying
encodings adds the encoded integers modulo 2N (with a sign flip every time the
sum crosses N, because X^N = -1).
"""

from typing import Union

from privcmp.privcmp_compare import errors
from privcmp.privcmp_lib import interfaces
from privcmp.privcmp_lib import ring


def encode_on_degree(
    value: int, params: interfaces.EncryptionContext
) -> ring.RingElement:
  """Returns the monomial X^(value mod N).

  Args:
    value: the integer to encode. Negative values are shifted into [0, N) by
      adding N until non-negative.
    params: the ring parameters, providing the ring degree N.

  Returns:
    A ring element of degree N with a single coefficient 1.

  Raises:
    InvalidRingParameters: if the ring degree is not positive.
  """
  degree = params.ring_degree
  if degree <= 0:
    raise errors.InvalidRingParameters(
        f'Ring degree must be positive, got {degree}.'
    )
  return ring.monomial(value % degree, degree)


def encrypt_in_degree(
    value: int,
    key: Union[interfaces.PublicKey, interfaces.SecretKey],
) -> interfaces.Ciphertext:
  """Encrypts X^value under a public or secret key."""
  return key.encrypt(encode_on_degree(value, key.context))

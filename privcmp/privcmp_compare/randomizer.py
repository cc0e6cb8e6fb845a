"""Blinding polynomials for comparison results."""

from typing import Optional

from privcmp.privcmp_lib import arithmetic_context
from privcmp.privcmp_lib import interfaces
from privcmp.privcmp_lib import random_source
from privcmp.privcmp_lib import ring

_DEFAULT_PRG = random_source.SystemRandomSource()


def sample_blinding_polynomial(
    params: interfaces.EncryptionContext,
    prg: Optional[random_source.RandomSource] = None,
    arith: Optional[arithmetic_context.ArithmeticContext] = None,
) -> ring.RingElement:
  """Samples a ring element with coefficients uniform in [0, p^r).

  The sample is drawn under the plaintext modulus p^r, installed in `arith`
  only for the duration of the draw; whatever modulus was active before is
  restored afterwards, also when sampling fails.

  Args:
    params: the ring parameters, providing N and p^r.
    prg: the random source. Defaults to the operating system's.
    arith: the arithmetic context to borrow. Defaults to the process-wide one.

  Returns:
    A uniformly random ring element of degree N.
  """
  prg = prg or _DEFAULT_PRG
  arith = arith or arithmetic_context.DEFAULT_CONTEXT
  with arith.override(params.plaintext_modulus):
    return ring.random_element(params.ring_degree, prg, arith)

"""Counting how many encrypted values are below an encrypted value."""

import logging
from typing import Sequence

from privcmp.privcmp_compare import comparison_spec
from privcmp.privcmp_compare import degree_negation
from privcmp.privcmp_lib import interfaces
from privcmp.privcmp_lib import ring


def count_less_than(
    ctx_a: interfaces.Ciphertext,
    ctx_bs: Sequence[interfaces.Ciphertext],
    params: interfaces.EncryptionContext,
) -> interfaces.Ciphertext:
  """Returns an encryption whose constant coefficient is |{i : b_i < a}|.

  Summing the encryptions of X^{b_i} first means a single degree negation and
  a single ciphertext product serve all k comparisons: the constant
  coefficient of sum_i X^{a - b_i} * (-midpoint) * T is -midpoint for each
  b_i >= a and +midpoint for each b_i < a, with midpoint = 1/2 mod p^r, so
  adding k * midpoint leaves exactly the count.

  Unlike `greater_than`, no blinding polynomial is added, so coefficients
  other than the constant one are not hidden.

  Args:
    ctx_a: an encryption of X^a.
    ctx_bs: encryptions of X^{b_i} under the same key. May be empty.
    params: the ring parameters.

  Returns:
    A new ciphertext; the inputs are not modified.

  Raises:
    MissingKeySwitchMaterial: if the key of `ctx_a` lacks the negation key.
  """
  degree_negation.require_negation_key(ctx_a.public_key)
  spec = comparison_spec.create_comparison_spec(1, 0, params, randomize=False)

  if ctx_bs:
    result = ctx_bs[0].copy()
    for ctx_b in ctx_bs[1:]:
      result.add_in_place(ctx_b)
  else:
    result = ctx_a.public_key.encrypt(ring.zero(params.ring_degree))
  logging.debug('Counting values below a among %d ciphertexts', len(ctx_bs))

  degree_negation.negate_degree(result, params)
  result.multiply_in_place(ctx_a)
  result.multiply_by_constant(spec.scaled_mask())
  offset = (len(ctx_bs) * spec.midpoint) % params.plaintext_modulus
  result.add_constant(ring.constant(offset, params.ring_degree))
  return result

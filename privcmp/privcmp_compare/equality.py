"""Private equality test over degree-encoded ciphertexts."""

from typing import Optional

from privcmp.privcmp_compare import comparison_spec
from privcmp.privcmp_compare import degree_negation
from privcmp.privcmp_compare import randomizer
from privcmp.privcmp_compare import test_vector
from privcmp.privcmp_lib import arithmetic_context
from privcmp.privcmp_lib import interfaces
from privcmp.privcmp_lib import random_source
from privcmp.privcmp_lib import ring


def equality_test(
    ctx_a: interfaces.Ciphertext,
    ctx_b: interfaces.Ciphertext,
    params: interfaces.EncryptionContext,
    randomize: bool = True,
    prg: Optional[random_source.RandomSource] = None,
    arith: Optional[arithmetic_context.ArithmeticContext] = None,
) -> interfaces.Ciphertext:
  """Returns an encryption whose constant coefficient is 0 iff a == b, else 1.

  With d = a - b, two terms are added:

    X^d * (X + ... + X^{N-1}) has constant coefficient 0, -1 or +1 for d == 0,
      d > 0 and d < 0 respectively;
    X^d * (-1) * T + 1 has constant coefficient 0, 2 or 0 in the same cases.

  The sum is 0 for d == 0 and 1 otherwise.

  Args:
    ctx_a: an encryption of X^a.
    ctx_b: an encryption of X^b under the same key.
    params: the ring parameters.
    randomize: add a blinding polynomial with a zero constant term.
    prg: the random source for the blinding polynomial.
    arith: the arithmetic context borrowed while sampling it.

  Returns:
    A new ciphertext; the inputs are not modified.

  Raises:
    MissingKeySwitchMaterial: if the key of `ctx_a` lacks the negation key.
  """
  degree_negation.require_negation_key(ctx_a.public_key)
  spec = comparison_spec.create_comparison_spec(2, 0, params, randomize=False)

  result = ctx_b.copy()
  degree_negation.negate_degree(result, params)
  result.multiply_in_place(ctx_a)  # X^{a-b}

  helper = result.copy()
  helper.multiply_by_constant(test_vector.build_equality_mask(params))

  result.multiply_by_constant(spec.scaled_mask())
  result.add_constant(ring.constant(spec.midpoint, params.ring_degree))
  result.add_in_place(helper)

  if randomize:
    blinding = randomizer.sample_blinding_polynomial(
        params, prg=prg, arith=arith
    )
    result.add_constant(blinding.with_coeff(0, 0))
  return result

"""Private greater-than over degree-encoded ciphertexts.

Given encryptions of X^a and X^b (or an encryption of X^a and a public b), with
a and b in [0, N), the result is a ciphertext whose constant coefficient
decrypts to `spec.output_if_greater` if a > b and to
`spec.output_if_not_greater` otherwise:

  1. negate the degree of X^b and multiply by X^a, giving X^{a-b};
  2. multiply by (output_if_not_greater - midpoint) * T, where T is the test
     vector, so the constant coefficient becomes -/+ that gap depending on
     whether a - b > 0 (see `test_vector`);
  3. add midpoint, which maps the two cases to the two output codes.

With `spec.randomize`, the other coefficients of the constant added in step 3
are uniformly random, so the result reveals nothing beyond its constant
coefficient.
"""

import numbers
from typing import Optional, Union

from privcmp.privcmp_compare import comparison_spec
from privcmp.privcmp_compare import degree_negation
from privcmp.privcmp_compare import errors
from privcmp.privcmp_compare import randomizer
from privcmp.privcmp_lib import arithmetic_context
from privcmp.privcmp_lib import interfaces
from privcmp.privcmp_lib import random_source
from privcmp.privcmp_lib import ring

ComparisonSpec = comparison_spec.ComparisonSpec


def default_spec(params: interfaces.EncryptionContext) -> ComparisonSpec:
  """Returns the spec producing 0 if a > b and 1 otherwise, randomized."""
  return comparison_spec.create_comparison_spec(0, 1, params, randomize=True)


def prepare_xb(
    b: int,
    spec: ComparisonSpec,
    params: interfaces.EncryptionContext,
    arith: Optional[arithmetic_context.ArithmeticContext] = None,
) -> ring.RingElement:
  """Returns X^{-b} * (output_if_not_greater - midpoint) * T mod p^r.

  Multiplying by X^{-b} = -X^{N-b} rotates T by b positions and negates the b
  coefficients that wrap around, which for the all-equal T is the same as
  negating its top b coefficients.

  Args:
    b: the public value, in [0, N).
    spec: the comparison spec.
    params: the ring parameters.
    arith: the arithmetic context borrowed to reduce the result mod p^r.

  Returns:
    The constant to multiply an encryption of X^a with.

  Raises:
    InvalidRingParameters: if the ring is not Z[X] / (X^N + 1), or `spec` was
      built for other parameters.
    ValueError: if b is outside [0, N).
  """
  spec.check_params(params)
  n = params.ring_degree
  if params.cyclotomic_index != 2 * n:
    raise errors.InvalidRingParameters(
        'prepare_xb only works for the ring Z[X] / (X^N + 1), but m ='
        f' {params.cyclotomic_index} and N = {n}.'
    )
  if not 0 <= b < n:
    raise ValueError(f'`b` must be in [0, {n}), got {b}.')
  coeffs = spec.scaled_mask().coeffs
  flipped = ring.RingElement(coeffs.at[n - b :].set(-coeffs[n - b :]))
  arith = arith or arithmetic_context.DEFAULT_CONTEXT
  with arith.override(params.plaintext_modulus):
    return ring.reduce(flipped, arith)


def blinding_constant(
    spec: ComparisonSpec,
    params: interfaces.EncryptionContext,
    prg: Optional[random_source.RandomSource] = None,
    arith: Optional[arithmetic_context.ArithmeticContext] = None,
) -> ring.RingElement:
  """Returns the constant added last: midpoint, plus noise if randomized."""
  if spec.randomize:
    r = randomizer.sample_blinding_polynomial(params, prg=prg, arith=arith)
  else:
    r = ring.zero(params.ring_degree)
  return r.with_coeff(0, spec.midpoint)


def greater_than(
    ctx_a: interfaces.Ciphertext,
    b: Union[interfaces.Ciphertext, int],
    params: interfaces.EncryptionContext,
    spec: Optional[ComparisonSpec] = None,
    prg: Optional[random_source.RandomSource] = None,
    arith: Optional[arithmetic_context.ArithmeticContext] = None,
) -> interfaces.Ciphertext:
  """Privately compares an encrypted a with an encrypted or public b.

  Neither input ciphertext is modified.

  Args:
    ctx_a: an encryption of X^a.
    b: an encryption of X^b under the same key, or b itself as an int.
    params: the ring parameters.
    spec: the output codes and randomization. Defaults to `default_spec`.
    prg: the random source for the blinding polynomial.
    arith: the arithmetic context borrowed while reducing constants and
      sampling the blinding polynomial.

  Returns:
    A ciphertext whose constant coefficient decrypts to
    `spec.output_if_greater` if a > b and `spec.output_if_not_greater`
    otherwise.

  Raises:
    MissingKeySwitchMaterial: if `install_negation_key` was not called on the
      secret key of `ctx_a`.
    InvalidRingParameters: if `spec` was built for other parameters.
  """
  degree_negation.require_negation_key(ctx_a.public_key)
  if spec is None:
    spec = default_spec(params)
  spec.check_params(params)

  if isinstance(b, numbers.Integral):
    result = ctx_a.copy()
    result.multiply_by_constant(prepare_xb(int(b), spec, params, arith))
  else:
    result = b.copy()
    degree_negation.negate_degree(result, params)  # X^{-b}
    result.multiply_in_place(ctx_a)  # X^{a-b}
    result.multiply_by_constant(spec.scaled_mask())

  result.add_constant(blinding_constant(spec, params, prg=prg, arith=arith))
  return result

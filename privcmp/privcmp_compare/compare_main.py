"""Runs one private comparison end to end and prints the decrypted results.

Example:

  privcmp-demo --ring_degree=16 --plaintext_prime=257 --a=9 --b=4
"""

import logging
from typing import Sequence

from absl import app
from absl import flags
from privcmp.privcmp_compare import compare
from privcmp.privcmp_lib import parameters
from privcmp.privcmp_lib import random_source

_RING_DEGREE = flags.DEFINE_integer(
    'ring_degree', 16, 'Ring degree N, a power of two.'
)
_PLAINTEXT_PRIME = flags.DEFINE_integer(
    'plaintext_prime', 257, 'Prime p of the plaintext modulus p^r.'
)
_HENSEL_LIFTING = flags.DEFINE_integer(
    'hensel_lifting', 1, 'Exponent r of the plaintext modulus p^r.'
)
_A = flags.DEFINE_integer('a', 9, 'The encrypted value a, in [0, N).')
_B = flags.DEFINE_integer('b', 4, 'The value b, in [0, N).')
_PUBLIC_B = flags.DEFINE_bool(
    'public_b', False, 'Compare against b in the clear instead of encrypted.'
)
_RANDOMIZE = flags.DEFINE_bool(
    'randomize', True, 'Blind all but the constant coefficient of the result.'
)
_SEED = flags.DEFINE_integer(
    'seed', None, 'Seed for a reproducible, insecure run.'
)


def main(argv: Sequence[str]) -> None:
  if len(argv) > 1:
    raise app.UsageError('Too many command-line arguments.')

  params = parameters.get_params(
      _RING_DEGREE.value, _PLAINTEXT_PRIME.value, _HENSEL_LIFTING.value
  )
  n = params.ring_degree
  for name, value in (('a', _A.value), ('b', _B.value)):
    if not 0 <= value < n:
      raise app.UsageError(f'--{name} must be in [0, {n}), got {value}.')

  if _SEED.value is None:
    prg = random_source.SystemRandomSource()
  else:
    prg = random_source.PseudorandomSource(seed=_SEED.value)
  logging.info(
      'Generating keys for N = %d, p^r = %d', n, params.plaintext_modulus
  )
  keys = compare.ClientKeySet(params, prg)

  ctx_a = compare.encrypt(_A.value, keys)
  ctx_b = compare.encrypt(_B.value, keys)
  rhs = _B.value if _PUBLIC_B.value else ctx_b
  spec = compare.create_comparison_spec(
      1, 0, params, randomize=_RANDOMIZE.value
  )

  gt = compare.decrypt(compare.greater_than(ctx_a, rhs, params, spec, prg), keys)
  ne = compare.decrypt(
      compare.equal(ctx_a, ctx_b, params, randomize=_RANDOMIZE.value, prg=prg),
      keys,
  )
  below = compare.decrypt(compare.count_less_than(ctx_a, [ctx_b], params), keys)
  print(f'a > b:  {gt}')
  print(f'a != b: {ne}')
  print(f'#(b < a): {below}')


def run() -> None:
  app.run(main)


if __name__ == '__main__':
  run()

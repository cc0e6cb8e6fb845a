"""Tests for randomizer."""

import numpy as np
from privcmp.privcmp_compare import randomizer
from privcmp.privcmp_compare import test_utils
from privcmp.privcmp_lib import arithmetic_context
from privcmp.privcmp_lib import random_source
from absl.testing import absltest

PARAMS = test_utils.SMALL_PARAMS


class FailingRng(random_source.RandomSource):

  def uniform(self, shape, bounds=None):
    raise RuntimeError('entropy exhausted')


class RandomizerTest(absltest.TestCase):

  def test_coefficients_below_plaintext_modulus(self):
    prg = random_source.PseudorandomSource(seed=2)
    sample = randomizer.sample_blinding_polynomial(
        PARAMS, prg=prg, arith=arithmetic_context.ArithmeticContext()
    )
    self.assertEqual(sample.degree, PARAMS.ring_degree)
    coeffs = np.asarray(sample.coeffs)
    self.assertTrue(np.all((coeffs >= 0) & (coeffs < PARAMS.plaintext_modulus)))

  def test_restores_previous_modulus(self):
    arith = arithmetic_context.ArithmeticContext(97)
    randomizer.sample_blinding_polynomial(PARAMS, arith=arith)
    self.assertEqual(arith.modulus, 97)

  def test_restores_previous_modulus_on_failure(self):
    arith = arithmetic_context.ArithmeticContext(97)
    with self.assertRaisesRegex(RuntimeError, 'entropy exhausted'):
      randomizer.sample_blinding_polynomial(
          PARAMS, prg=FailingRng(), arith=arith
      )
    self.assertEqual(arith.modulus, 97)

  def test_default_context_is_left_unchanged(self):
    before = arithmetic_context.DEFAULT_CONTEXT.modulus
    randomizer.sample_blinding_polynomial(PARAMS)
    self.assertEqual(arithmetic_context.DEFAULT_CONTEXT.modulus, before)

  def test_samples_vary(self):
    prg = random_source.PseudorandomSource(seed=4)
    samples = {
        tuple(randomizer.sample_blinding_polynomial(PARAMS, prg=prg).tolist())
        for _ in range(5)
    }
    self.assertGreater(len(samples), 1)


if __name__ == '__main__':
  absltest.main()

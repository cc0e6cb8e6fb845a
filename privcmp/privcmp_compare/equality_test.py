"""Tests for equality."""

import itertools

from privcmp.privcmp_compare import equality
from privcmp.privcmp_compare import errors
from privcmp.privcmp_compare import test_utils
from privcmp.privcmp_lib import random_source
from absl.testing import absltest
from absl.testing import parameterized

PARAMS = test_utils.SMALL_PARAMS
N = PARAMS.ring_degree


class EqualityTest(parameterized.TestCase):

  @classmethod
  def setUpClass(cls):
    super().setUpClass()
    cls.secret_key = test_utils.secret_key_with_negation()
    cls.ciphertexts = [
        test_utils.encrypt(v, cls.secret_key) for v in range(N)
    ]

  @parameterized.parameters(True, False)
  def test_exhaustive(self, randomize):
    prg = random_source.PseudorandomSource(seed=21)
    for a, b in itertools.product(range(N), range(N)):
      result = equality.equality_test(
          self.ciphertexts[a],
          self.ciphertexts[b],
          PARAMS,
          randomize=randomize,
          prg=prg,
      )
      self.assertEqual(
          test_utils.decrypt_constant(result, self.secret_key),
          0 if a == b else 1,
          (a, b),
      )

  def test_randomization_hides_other_coefficients(self):
    prg = random_source.PseudorandomSource(seed=22)
    results = [
        self.secret_key.decrypt(
            equality.equality_test(
                self.ciphertexts[2], self.ciphertexts[2], PARAMS, prg=prg
            )
        ).tolist()
        for _ in range(3)
    ]
    self.assertTrue(all(r[0] == 0 for r in results))
    self.assertLen({tuple(r[1:]) for r in results}, 3)

  def test_inputs_are_not_modified(self):
    ctx_a = test_utils.encrypt(1, self.secret_key)
    ctx_b = test_utils.encrypt(6, self.secret_key)
    before = [test_utils.ciphertext_state(c) for c in (ctx_a, ctx_b)]
    equality.equality_test(ctx_a, ctx_b, PARAMS)
    after = [test_utils.ciphertext_state(c) for c in (ctx_a, ctx_b)]
    self.assertEqual(before, after)

  def test_missing_negation_key(self):
    secret_key = test_utils.secret_key_without_negation()
    ctx_a = test_utils.encrypt(3, secret_key)
    with self.assertRaises(errors.MissingKeySwitchMaterial):
      equality.equality_test(ctx_a, ctx_a.copy(), PARAMS)


if __name__ == '__main__':
  absltest.main()

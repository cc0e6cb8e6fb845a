"""Tests for the comparison API."""

from privcmp.privcmp_compare import compare
from privcmp.privcmp_compare import degree_negation
from privcmp.privcmp_compare import test_utils
from privcmp.privcmp_lib import arithmetic_context
from privcmp.privcmp_lib import random_source
from absl.testing import absltest
from absl.testing import parameterized

PARAMS = test_utils.SMALL_PARAMS


class _RecordingContext(arithmetic_context.ArithmeticContext):
  """Remembers every modulus it was asked to install."""

  def __init__(self, modulus):
    super().__init__(modulus)
    self.installed = []

  def override(self, modulus):
    self.installed.append(modulus)
    return super().override(modulus)


class CompareTest(parameterized.TestCase):

  @classmethod
  def setUpClass(cls):
    super().setUpClass()
    cls.prg = random_source.PseudorandomSource(seed=31)
    cls.keys = compare.ClientKeySet(PARAMS, cls.prg)

  def test_client_key_set_has_negation_key(self):
    self.assertTrue(degree_negation.has_negation_key(self.keys.public_key))
    self.assertIs(self.keys.public_key, self.keys.secret_key.public_key)

  @parameterized.parameters((5, 2), (2, 5), (4, 4))
  def test_greater_than(self, a, b):
    ctx_a = compare.encrypt(a, self.keys)
    ctx_b = compare.encrypt(b, self.keys)
    spec = compare.create_comparison_spec(1, 0, PARAMS)
    for rhs in (ctx_b, b):
      result = compare.greater_than(ctx_a, rhs, PARAMS, spec, prg=self.prg)
      self.assertEqual(compare.decrypt(result, self.keys), int(a > b))

  def test_greater_than_default_spec(self):
    result = compare.greater_than(
        compare.encrypt(1, self.keys), compare.encrypt(0, self.keys), PARAMS
    )
    self.assertEqual(compare.decrypt(result, self.keys), 0)

  @parameterized.parameters((3, 3, 0), (3, 6, 1), (7, 0, 1))
  def test_equal(self, a, b, expected):
    result = compare.equal(
        compare.encrypt(a, self.keys),
        compare.encrypt(b, self.keys),
        PARAMS,
        prg=self.prg,
    )
    self.assertEqual(compare.decrypt(result, self.keys), expected)

  def test_arithmetic_context_is_passed_through(self):
    ctx_a = compare.encrypt(5, self.keys)
    ctx_b = compare.encrypt(2, self.keys)
    for rhs in (ctx_b, 2):
      arith = _RecordingContext(97)
      result = compare.greater_than(
          ctx_a, rhs, PARAMS, prg=self.prg, arith=arith
      )
      self.assertEqual(compare.decrypt(result, self.keys), 0)
      self.assertIn(PARAMS.plaintext_modulus, arith.installed)
      self.assertEqual(arith.modulus, 97)
    arith = _RecordingContext(97)
    result = compare.equal(ctx_a, ctx_b, PARAMS, prg=self.prg, arith=arith)
    self.assertEqual(compare.decrypt(result, self.keys), 1)
    self.assertEqual(arith.installed, [PARAMS.plaintext_modulus])
    self.assertEqual(arith.modulus, 97)

  def test_count_less_than(self):
    others = [compare.encrypt(b, self.keys) for b in (0, 6, 2, 3)]
    result = compare.count_less_than(
        compare.encrypt(3, self.keys), others, PARAMS
    )
    self.assertEqual(compare.decrypt(result, self.keys), 2)


if __name__ == '__main__':
  absltest.main()

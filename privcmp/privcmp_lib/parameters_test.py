from privcmp.privcmp_lib import parameters
from absl.testing import absltest
from absl.testing import parameterized


class ParametersTest(parameterized.TestCase):

  def test_derived_fields(self):
    params = parameters.SchemeParameters(
        cyclotomic_index=32, plaintext_prime=17, hensel_lifting=2
    )
    self.assertEqual(params.ring_degree, 16)
    self.assertEqual(params.plaintext_modulus, 289)

  def test_ring_degree_is_euler_phi(self):
    params = parameters.SchemeParameters(
        cyclotomic_index=15, plaintext_prime=257
    )
    self.assertEqual(params.ring_degree, 8)

  def test_get_params(self):
    params = parameters.get_params(ring_degree=64, plaintext_prime=7)
    self.assertEqual(params.cyclotomic_index, 128)
    self.assertEqual(params.ring_degree, 64)
    self.assertEqual(params.moduli, parameters.DEFAULT_MODULI)

  def test_toy_params(self):
    self.assertEqual(parameters.TOY_PARAMS.ring_degree, 16)
    self.assertEqual(parameters.TOY_PARAMS.plaintext_modulus, 257)

  def test_get_params_rejects_non_power_of_two(self):
    with self.assertRaises(ValueError):
      parameters.get_params(ring_degree=12, plaintext_prime=7)

  @parameterized.named_parameters(
      ('prime_too_small', 1, 1),
      ('no_lifting', 7, 0),
      ('modulus_too_large', 257, 2),
  )
  def test_rejects_invalid_plaintext_modulus(self, prime, lifting):
    with self.assertRaises(ValueError):
      parameters.SchemeParameters(
          cyclotomic_index=16, plaintext_prime=prime, hensel_lifting=lifting
      )

  def test_moduli_support_large_rings(self):
    for q in parameters.DEFAULT_MODULI:
      self.assertEqual((q - 1) % 2**21, 0)


if __name__ == '__main__':
  absltest.main()

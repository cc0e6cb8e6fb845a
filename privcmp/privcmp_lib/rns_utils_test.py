from privcmp.privcmp_lib import rns_utils
from absl.testing import absltest
from absl.testing import parameterized


class RnsUtilsTest(parameterized.TestCase):

  def test_inverse_mod(self):
    self.assertEqual(rns_utils.inverse_mod(3, 7), 5)
    self.assertEqual(rns_utils.inverse_mod(2, 257), 129)

  def test_is_power_of_two(self):
    self.assertTrue(rns_utils.is_power_of_two(1))
    self.assertTrue(rns_utils.is_power_of_two(1024))
    self.assertFalse(rns_utils.is_power_of_two(0))
    self.assertFalse(rns_utils.is_power_of_two(12))

  def test_bit_reversal_array(self):
    xs = list(range(8))
    rns_utils.bit_reversal_array(xs)
    self.assertEqual(xs, [0, 4, 2, 6, 1, 5, 3, 7])

  @parameterized.parameters(
      (1, 1), (2, 1), (8, 4), (32, 16), (15, 8), (12, 4), (7, 6)
  )
  def test_euler_phi(self, m, expected):
    self.assertEqual(rns_utils.euler_phi(m), expected)

  def test_euler_phi_rejects_non_positive(self):
    with self.assertRaises(ValueError):
      rns_utils.euler_phi(0)

  @parameterized.parameters((0, 7, 0), (3, 7, 3), (4, 7, -3), (-1, 7, -1),
                            (5, 10, 5), (6, 10, -4))
  def test_centered(self, x, q, expected):
    self.assertEqual(rns_utils.centered(x, q), expected)

  def test_product(self):
    self.assertEqual(rns_utils.product([3, 5, 7]), 105)
    self.assertEqual(rns_utils.product([]), 1)


if __name__ == '__main__':
  absltest.main()

"""Tests for random_source."""

import numpy as np
from privcmp.privcmp_lib import random_source
from absl.testing import absltest
from absl.testing import parameterized


class ShapeGeneratorTest(absltest.TestCase):

  def setUp(self):
    super().setUp()
    self.constant_function = lambda: 1

  def test_valid_shape(self):
    test_shape = (10, 10)
    result = random_source._shape_generator(self.constant_function, test_shape)
    self.assertEqual(result.shape, test_shape)

  def test_nd_shape_is_valid(self):
    test_shape = (2, 2, 2, 2)
    result = random_source._shape_generator(self.constant_function, test_shape)
    self.assertEqual(result.shape, test_shape)

  def test_invalid_shape(self):
    test_shape = (-1, 1)
    with self.assertRaises(ValueError):
      _ = random_source._shape_generator(self.constant_function, test_shape)


class AllRngsTest(absltest.TestCase):

  def test_sk_uniform_is_binary(self):
    for rng_class in random_source.ALL_RNGS:
      data = [int(x) for x in rng_class().sk_uniform(shape=(100,))]
      non_binary_values = set(data) - set([0, 1])
      self.assertEmpty(non_binary_values)

  def test_empty_bounds_rejected(self):
    for rng_class in random_source.ALL_RNGS:
      with self.assertRaises(ValueError):
        rng_class().uniform((4,), bounds=(5, 5))


@parameterized.parameters(
    random_source.SystemRandomSource(),
    random_source.PseudorandomSource(),
)
class CryptographicallySecureRandomSourceTest(parameterized.TestCase):

  def test_uniform_valid_and_correct_shape(
      self, rng: random_source.RandomSource
  ):
    test_shape = (10, 10)
    result = rng.uniform(test_shape)
    self.assertEqual(result.shape, test_shape)

  def test_rounded_normal_valid_and_correct_shape(
      self, rng: random_source.RandomSource
  ):
    test_shape = (10, 10)
    result = rng.rounded_normal(test_shape)
    self.assertEqual(result.shape, test_shape)
    self.assertEqual(result.dtype, np.int64)

  def test_uniform_elements_within_bounds(
      self, rng: random_source.RandomSource
  ):
    result = rng.uniform((50, 50), bounds=(3, 17))
    self.assertTrue(np.all((result >= 3) & (result < 17)))

  def test_uniform_large_bounds(self, rng: random_source.RandomSource):
    q = 1004535809
    result = rng.uniform((100,), bounds=(0, q))
    self.assertTrue(np.all((result >= 0) & (result < q)))


class PseudorandomSourceTest(absltest.TestCase):

  def test_same_seed_same_samples(self):
    rng0 = random_source.PseudorandomSource(seed=7)
    rng1 = random_source.PseudorandomSource(seed=7)
    np.testing.assert_array_equal(rng0.uniform((20,)), rng1.uniform((20,)))
    np.testing.assert_array_equal(
        rng0.rounded_normal((20,)), rng1.rounded_normal((20,))
    )

  def test_zero_std_gives_zero_noise(self):
    rng = random_source.PseudorandomSource(normal_std=0, seed=1)
    self.assertTrue(np.all(rng.rounded_normal((10,)) == 0))


class ZeroRandomSourceTest(absltest.TestCase):

  def setUp(self):
    super().setUp()
    # Both the uniform and the rounded normal samples are expected to be zero.
    self.rng = random_source.ZeroRng()

  def test_uniform_elements_equal_lower_bound(self):
    test_shape = (10, 10)
    result = self.rng.uniform(test_shape)
    self.assertEqual(result.shape, test_shape)
    self.assertTrue(np.all(result == 0))

  def test_rounded_normal_elements_equal_zero(self):
    test_shape = (10, 10)
    result = self.rng.rounded_normal(test_shape)
    self.assertTrue(np.all(result == 0))


if __name__ == '__main__':
  absltest.main()

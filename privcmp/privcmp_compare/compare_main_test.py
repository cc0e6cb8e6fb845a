import contextlib
import io

from absl import app
from absl import flags
from absl.testing import absltest
from absl.testing import flagsaver
from privcmp.privcmp_compare import compare_main

FLAGS = flags.FLAGS


class CompareMainTest(absltest.TestCase):

  def setUp(self):
    super().setUp()
    if not FLAGS.is_parsed():
      FLAGS.mark_as_parsed()

  def _run(self) -> str:
    out = io.StringIO()
    with contextlib.redirect_stdout(out):
      compare_main.main(['privcmp-demo'])
    return out.getvalue()

  @flagsaver.flagsaver(ring_degree=8, a=6, b=2, seed=1)
  def test_a_greater(self):
    output = self._run()
    self.assertIn('a > b:  1', output)
    self.assertIn('a != b: 1', output)
    self.assertIn('#(b < a): 1', output)

  @flagsaver.flagsaver(ring_degree=8, a=3, b=3, seed=1, public_b=True)
  def test_equal_with_public_b(self):
    output = self._run()
    self.assertIn('a > b:  0', output)
    self.assertIn('a != b: 0', output)
    self.assertIn('#(b < a): 0', output)

  @flagsaver.flagsaver(ring_degree=8, a=8, b=0)
  def test_out_of_range_value(self):
    with self.assertRaises(app.UsageError):
      compare_main.main(['privcmp-demo'])

  def test_too_many_arguments(self):
    with self.assertRaises(app.UsageError):
      compare_main.main(['privcmp-demo', 'extra'])


if __name__ == '__main__':
  absltest.main()

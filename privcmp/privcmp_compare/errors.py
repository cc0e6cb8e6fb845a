"""Errors raised by the comparison protocols."""


class MissingKeySwitchMaterial(RuntimeError):
  """The key lacks the key switching key for the degree-negating automorphism.

  Call `degree_negation.install_negation_key` on the secret key before running
  any comparison.
  """


class InvalidRingParameters(ValueError):
  """The ring parameters cannot support the requested operation."""

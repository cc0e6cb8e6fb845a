"""Negating the encrypted degree with the automorphism X -> X^{m-1}.

Since X^m = 1 in the m'th cyclotomic ring, X^{m-1} = X^{-1}, so the
automorphism sends an encryption of X^k to an encryption of X^{-k}, which is
-X^{N-k} in Z[X] / (X^N + 1). Applying it to an encrypted value requires a key
switching key, installed once per secret key by `install_negation_key`.
"""

import logging

from privcmp.privcmp_compare import errors
from privcmp.privcmp_compare import test_vector
from privcmp.privcmp_lib import interfaces


def negation_exponent(params: interfaces.EncryptionContext) -> int:
  return params.cyclotomic_index - 1


def install_negation_key(
    secret_key: interfaces.SecretKey, strict: bool = False
) -> None:
  """Installs the key switching key for X -> X^{m-1} on `secret_key`.

  Must be called before any comparison on ciphertexts under this key, and
  before comparisons are started on other threads. Calling it again only
  regenerates the same kind of material.
  """
  params = secret_key.context
  test_vector.check_negacyclic(params, strict=strict)
  exponent = negation_exponent(params)
  secret_key.install_automorphism_key(exponent)
  logging.debug('Installed degree negation key for exponent %d', exponent)


def has_negation_key(public_key: interfaces.PublicKey) -> bool:
  return public_key.has_automorphism_key(negation_exponent(public_key.context))


def require_negation_key(public_key: interfaces.PublicKey) -> None:
  """Raises MissingKeySwitchMaterial unless the negation key is installed."""
  if not has_negation_key(public_key):
    raise errors.MissingKeySwitchMaterial(
        'The key has no key switching key for X -> X^{m-1}; call'
        ' install_negation_key on the secret key first.'
    )


def negate_degree(
    ciphertext: interfaces.Ciphertext, params: interfaces.EncryptionContext
) -> None:
  """Turns an encryption of X^k into one of X^{-k}, in place.

  Raises:
    MissingKeySwitchMaterial: if the ciphertext's key lacks the negation key.
      The ciphertext is left untouched.
  """
  require_negation_key(ciphertext.public_key)
  ciphertext.apply_automorphism(negation_exponent(params))

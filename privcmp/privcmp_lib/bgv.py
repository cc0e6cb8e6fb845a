"""BGV homomorphic encryption over Z_{p^r}[X] / (X^N + 1).

This is a leveled BGV scheme with no modulus switching: the ciphertext modulus
Q is the product of `SchemeParameters.moduli` for the whole life of a
ciphertext, so the supported multiplicative depth is whatever the noise growth
allows under that fixed Q. It satisfies the `interfaces` protocols and is the
backend the comparison protocols are tested against.

A ciphertext (c0, c1) under secret s satisfies c0 + c1 * s = m + t * e (mod Q),
where t = p^r is the plaintext modulus and e is small. Decryption recovers
m = [c0 + c1 * s]_Q mod t.
"""

import logging
from typing import Optional

from privcmp.privcmp_lib import key_switch
from privcmp.privcmp_lib import parameters
from privcmp.privcmp_lib import random_source
from privcmp.privcmp_lib import ring
from privcmp.privcmp_lib import rns


def _rns_params_for(params: parameters.SchemeParameters) -> rns.RnsParams:
  if params.cyclotomic_index != 2 * params.ring_degree:
    raise ValueError(
        'The BGV backend only supports power-of-two cyclotomic indices, got'
        f' m = {params.cyclotomic_index}.'
    )
  return rns.RnsParams(params.ring_degree, list(params.moduli))


def _encode(
    plaintext: ring.RingElement, rns_params: rns.RnsParams
) -> rns.RnsPolynomial:
  """Lifts a plaintext ring element to an NTT-form polynomial in R_Q."""
  if plaintext.degree != rns_params.degree:
    raise ValueError(
        f'Plaintext has degree {plaintext.degree} but the ring has degree'
        f' {rns_params.degree}.'
    )
  poly = rns.gen_rns_polynomial(
      rns_params.degree, plaintext.tolist(), rns_params.moduli
  )
  poly.to_ntt_form(rns_params.ntt_params)
  return poly


def _sample_error(
    params: parameters.SchemeParameters,
    rns_params: rns.RnsParams,
    prg: random_source.RandomSource,
) -> rns.RnsPolynomial:
  """Returns t * e for a fresh Gaussian e, in the NTT form."""
  e = rns.gen_gaussian_polynomial(rns_params, prg, params.error_std)
  e.to_ntt_form(rns_params.ntt_params)
  return e.scale(params.plaintext_modulus)


class BgvCiphertext:
  """A BGV ciphertext [c0, c1] in the NTT form.

  All operations mutate the ciphertext in place. Products are relinearized
  immediately, so a ciphertext always has exactly two components between
  operations.
  """

  def __init__(
      self,
      public_key: 'BgvPublicKey',
      components: list[rns.RnsPolynomial],
  ) -> None:
    self._public_key = public_key
    self.components = components

  @property
  def public_key(self) -> 'BgvPublicKey':
    return self._public_key

  @property
  def size(self) -> int:
    """Returns the number of components of the ciphertext."""
    return len(self.components)

  def copy(self) -> 'BgvCiphertext':
    return BgvCiphertext(
        self._public_key, [c.copy() for c in self.components]
    )

  def _check_same_key(self, other: 'BgvCiphertext') -> None:
    if other.public_key is not self._public_key:
      raise ValueError('Ciphertexts must be encrypted under the same key.')

  def add_in_place(self, other: 'BgvCiphertext') -> None:
    self._check_same_key(other)
    self.components = [
        a + b for a, b in zip(self.components, other.components)
    ]

  def multiply_in_place(self, other: 'BgvCiphertext') -> None:
    """Tensors with `other`, then relinearizes back to two components."""
    self._check_same_key(other)
    c0, c1 = self.components
    d0, d1 = other.components
    e0 = c0 * d0
    e1 = c0 * d1 + c1 * d0
    e2 = c1 * d1
    rns_params = self._public_key.rns_params
    k0, k1 = key_switch.switch_key(
        self._public_key.relinearization_key, e2, rns_params
    )
    self.components = [e0 + k0, e1 + k1]

  def multiply_by_constant(self, constant: ring.RingElement) -> None:
    poly = _encode(constant, self._public_key.rns_params)
    self.components = [c * poly for c in self.components]

  def add_constant(self, constant: ring.RingElement) -> None:
    poly = _encode(constant, self._public_key.rns_params)
    self.components = [self.components[0] + poly] + self.components[1:]

  def apply_automorphism(self, exponent: int) -> None:
    """Maps an encryption of m(X) to an encryption of m(X^exponent).

    Raises:
      KeyError: if no key switching key for `exponent` has been installed.
    """
    ksk = self._public_key.automorphism_key(exponent)
    rns_params = self._public_key.rns_params
    permuted = []
    for c in self.components:
      c = c.copy()
      c.to_coeffs_form(rns_params.ntt_params)
      c = c.automorphism(exponent)
      c.to_ntt_form(rns_params.ntt_params)
      permuted.append(c)
    # Now c0 + c1 * s(X^k) = m(X^k) + t * e(X^k); switch c1 back to s.
    c0, c1 = permuted
    d0, d1 = key_switch.switch_key(ksk, c1, rns_params)
    self.components = [c0 + d0, d1]


class BgvPublicKey:
  """A BGV public key, together with the key switching keys it publishes."""

  def __init__(
      self,
      params: parameters.SchemeParameters,
      rns_params: rns.RnsParams,
      key_data: tuple[rns.RnsPolynomial, rns.RnsPolynomial],
      prg: random_source.RandomSource,
  ) -> None:
    self._params = params
    self._rns_params = rns_params
    self._key_data = key_data
    self._prg = prg
    self._relinearization_key: Optional[key_switch.KeySwitchingKey] = None
    self._automorphism_keys: dict[int, key_switch.KeySwitchingKey] = {}

  @property
  def context(self) -> parameters.SchemeParameters:
    return self._params

  @property
  def rns_params(self) -> rns.RnsParams:
    return self._rns_params

  @property
  def relinearization_key(self) -> key_switch.KeySwitchingKey:
    if self._relinearization_key is None:
      raise KeyError('No relinearization key has been installed.')
    return self._relinearization_key

  def _normalize(self, exponent: int) -> int:
    return exponent % self._params.cyclotomic_index

  def has_automorphism_key(self, exponent: int) -> bool:
    return self._normalize(exponent) in self._automorphism_keys

  def automorphism_key(self, exponent: int) -> key_switch.KeySwitchingKey:
    normalized = self._normalize(exponent)
    if normalized not in self._automorphism_keys:
      raise KeyError(
          f'No key switching key for the automorphism X -> X^{normalized}.'
      )
    return self._automorphism_keys[normalized]

  def encrypt(self, plaintext: ring.RingElement) -> BgvCiphertext:
    """Encrypts with the public key.

    With (p0, p1) = (a * s + t * e, -a), the ciphertext is
    (p0 * u + t * e1 + m, p1 * u + t * e2) for a fresh binary u.
    """
    rns_params = self._rns_params
    u = rns.gen_binary_polynomial(rns_params, self._prg)
    u.to_ntt_form(rns_params.ntt_params)
    p0, p1 = self._key_data
    c0 = (
        p0 * u
        + _sample_error(self._params, rns_params, self._prg)
        + _encode(plaintext, rns_params)
    )
    c1 = p1 * u + _sample_error(self._params, rns_params, self._prg)
    return BgvCiphertext(self, [c0, c1])


class BgvSecretKey:
  """A BGV secret key. It owns the matching public key."""

  def __init__(
      self,
      params: parameters.SchemeParameters,
      prg: Optional[random_source.RandomSource] = None,
  ) -> None:
    self._params = params
    self._rns_params = _rns_params_for(params)
    self._prg = prg or random_source.SystemRandomSource()

    rns_params = self._rns_params
    self._key = rns.gen_binary_polynomial(rns_params, self._prg)
    self._key.to_ntt_form(rns_params.ntt_params)

    a = rns.gen_uniform_polynomial(rns_params, self._prg)
    a.to_ntt_form(rns_params.ntt_params)
    p0 = a * self._key + _sample_error(params, rns_params, self._prg)
    self._public_key = BgvPublicKey(params, rns_params, (p0, -a), self._prg)
    self._public_key._relinearization_key = self._gen_switching_key(
        self._key * self._key
    )

  @property
  def context(self) -> parameters.SchemeParameters:
    return self._params

  @property
  def public_key(self) -> BgvPublicKey:
    return self._public_key

  def _gen_switching_key(
      self, source_key: rns.RnsPolynomial
  ) -> key_switch.KeySwitchingKey:
    return key_switch.gen_key(
        source_key=source_key,
        target_key=self._key,
        plaintext_modulus=self._params.plaintext_modulus,
        rns_params=self._rns_params,
        prg=self._prg,
        error_std=self._params.error_std,
    )

  def has_automorphism_key(self, exponent: int) -> bool:
    return self._public_key.has_automorphism_key(exponent)

  def install_automorphism_key(self, exponent: int) -> None:
    """Publishes a key switching key from s(X^exponent) to s(X)."""
    m = self._params.cyclotomic_index
    normalized = exponent % m
    if normalized % 2 == 0:
      raise ValueError(
          f'Automorphism exponent must be a unit mod {m}, got {exponent}.'
      )
    rotated = self._key.copy()
    rotated.to_coeffs_form(self._rns_params.ntt_params)
    rotated = rotated.automorphism(normalized)
    rotated.to_ntt_form(self._rns_params.ntt_params)
    self._public_key._automorphism_keys[normalized] = self._gen_switching_key(
        rotated
    )
    logging.debug('Installed key switching key for X -> X^%d', normalized)

  def encrypt(self, plaintext: ring.RingElement) -> BgvCiphertext:
    """Encrypts with the secret key: (a * s + t * e + m, -a)."""
    rns_params = self._rns_params
    a = rns.gen_uniform_polynomial(rns_params, self._prg)
    a.to_ntt_form(rns_params.ntt_params)
    c0 = (
        a * self._key
        + _sample_error(self._params, rns_params, self._prg)
        + _encode(plaintext, rns_params)
    )
    return BgvCiphertext(self._public_key, [c0, -a])

  def decrypt(self, ciphertext: BgvCiphertext) -> ring.RingElement:
    """Decrypts a ciphertext, returning coefficients in [0, p^r)."""
    if ciphertext.public_key is not self._public_key:
      raise ValueError('`ciphertext` was not encrypted under this key.')
    if ciphertext.size != 2:
      raise ValueError(
          f'`ciphertext` must have 2 components, got {ciphertext.size}.'
      )
    c0, c1 = ciphertext.components
    noisy = c0 + c1 * self._key
    noisy.to_coeffs_form(self._rns_params.ntt_params)
    coeffs = rns.crt_reconstruct(noisy.coeffs, noisy.moduli)
    t = self._params.plaintext_modulus
    return ring.from_coefficients([c % t for c in coeffs])


def gen_key(
    params: parameters.SchemeParameters,
    prg: Optional[random_source.RandomSource] = None,
) -> BgvSecretKey:
  """Generate a BGV secret key, its public key and relinearization key."""
  return BgvSecretKey(params, prg)

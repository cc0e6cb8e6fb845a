"""Capabilities the comparison protocols require from an encryption scheme.

The comparison protocols are written against these protocols only, so any
homomorphic encryption backend whose plaintext space is Z_{p^r}[X] / Phi_m(X)
and whose objects provide these members can be substituted for the bundled
BGV backend.
"""

from typing import Protocol

from privcmp.privcmp_lib import ring


class EncryptionContext(Protocol):
  """Read-only ring parameters of a scheme instance."""

  # the ring degree N = phi(m)
  ring_degree: int

  # the cyclotomic index m
  cyclotomic_index: int

  # the plaintext modulus p^r
  plaintext_modulus: int


class Ciphertext(Protocol):
  """An encrypted ring element. Mutating methods work in place."""

  @property
  def public_key(self) -> 'PublicKey':
    ...

  def copy(self) -> 'Ciphertext':
    ...

  def add_in_place(self, other: 'Ciphertext') -> None:
    ...

  def multiply_in_place(self, other: 'Ciphertext') -> None:
    ...

  def multiply_by_constant(self, constant: ring.RingElement) -> None:
    ...

  def add_constant(self, constant: ring.RingElement) -> None:
    ...

  def apply_automorphism(self, exponent: int) -> None:
    """Maps an encryption of m(X) to an encryption of m(X^exponent)."""
    ...


class PublicKey(Protocol):

  @property
  def context(self) -> EncryptionContext:
    ...

  def encrypt(self, plaintext: ring.RingElement) -> Ciphertext:
    ...

  def has_automorphism_key(self, exponent: int) -> bool:
    ...


class SecretKey(PublicKey, Protocol):

  @property
  def public_key(self) -> PublicKey:
    ...

  def install_automorphism_key(self, exponent: int) -> None:
    """Generates key-switching material for X -> X^exponent."""
    ...

  def decrypt(self, ciphertext: Ciphertext) -> ring.RingElement:
    ...

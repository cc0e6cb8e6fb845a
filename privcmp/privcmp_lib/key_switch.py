"""RLWE key-switching in RNS form.

A key switching key from a source key s' to a target key s lets a ciphertext
component c that multiplies s' be rewritten as a pair (d0, d1) with
d0 + d1 * s = c * s' + t * noise.

The gadget decomposition used here splits c into its RNS residues: the digit
for prime q_i is [c]_{q_i}, lifted to all primes. With the CRT basis element
g_i = (Q/q_i) * [(Q/q_i)^{-1}]_{q_i}, sum_i [c]_{q_i} * g_i = c mod Q. In RNS
form g_i is 1 modulo q_i and 0 modulo every other prime, so g_i * s' is just
s' restricted to row i.
"""

import dataclasses

from privcmp.privcmp_lib import random_source
from privcmp.privcmp_lib import rns
from privcmp.privcmp_lib import rns_utils


@dataclasses.dataclass
class KeySwitchingKey:
  """A key used to switch a ciphertext component from one secret to another."""

  # one pair (k0_i, k1_i) per RNS prime q_i, in the NTT form, with
  # k0_i + k1_i * s = t * e_i + g_i * s'.
  key_data: list[tuple[rns.RnsPolynomial, rns.RnsPolynomial]]


def _gadget_times(
    source_key: rns.RnsPolynomial, index: int
) -> rns.RnsPolynomial:
  """Returns g_index * source_key, which keeps only the row `index`."""
  coeffs = [
      list(row) if i == index else [0] * source_key.degree
      for i, row in enumerate(source_key.coeffs)
  ]
  return rns.RnsPolynomial(
      source_key.degree, source_key.moduli, coeffs, is_ntt=source_key.is_ntt
  )


def gen_key(
    source_key: rns.RnsPolynomial,
    target_key: rns.RnsPolynomial,
    plaintext_modulus: int,
    rns_params: rns.RnsParams,
    prg: random_source.RandomSource,
    error_std: float,
) -> KeySwitchingKey:
  """Generate a key switching key from `source_key` to `target_key`.

  Args:
    source_key: the secret s' that incoming components multiply, NTT form.
    target_key: the secret s that outgoing components multiply, NTT form.
    plaintext_modulus: the plaintext modulus t of the scheme.
    rns_params: the RNS parameters.
    prg: the random source for the masks and errors.
    error_std: the standard deviation of the error.

  Returns:
    The key switching key, with one RLWE sample per RNS prime.
  """
  key_data = []
  for i in range(len(rns_params.moduli)):
    a = rns.gen_uniform_polynomial(rns_params, prg)
    a.to_ntt_form(rns_params.ntt_params)
    e = rns.gen_gaussian_polynomial(rns_params, prg, error_std)
    e.to_ntt_form(rns_params.ntt_params)
    k0 = a * target_key + e.scale(plaintext_modulus) + _gadget_times(
        source_key, i
    )
    k1 = -a
    key_data.append((k0, k1))
  return KeySwitchingKey(key_data=key_data)


def _digits(
    component: rns.RnsPolynomial, rns_params: rns.RnsParams
) -> list[rns.RnsPolynomial]:
  """Splits an NTT-form component into its lifted RNS residues (NTT form)."""
  coeffs_form = component.copy()
  coeffs_form.to_coeffs_form(rns_params.ntt_params)
  digits = []
  for qi, row in zip(rns_params.moduli, coeffs_form.coeffs):
    # digits are balanced residues in (-q_i/2, q_i/2].
    lifted = [rns_utils.centered(c, qi) for c in row]
    digit = rns.gen_rns_polynomial(rns_params.degree, lifted, rns_params.moduli)
    digit.to_ntt_form(rns_params.ntt_params)
    digits.append(digit)
  return digits


def switch_key(
    ksk: KeySwitchingKey,
    component: rns.RnsPolynomial,
    rns_params: rns.RnsParams,
) -> tuple[rns.RnsPolynomial, rns.RnsPolynomial]:
  """Perform the key switch operation on a ciphertext component.

  Args:
    ksk: the key switching key from s' to s.
    component: an NTT-form polynomial c that multiplies s' at decryption.
    rns_params: the RNS parameters.

  Returns:
    NTT-form polynomials (d0, d1) with d0 + d1 * s = c * s' + t * noise.
  """
  digits = _digits(component, rns_params)
  if len(digits) != len(ksk.key_data):
    raise ValueError(
        f'Key switching key has {len(ksk.key_data)} components but the'
        f' ciphertext has {len(digits)} RNS primes.'
    )
  d0, d1 = None, None
  for digit, (k0, k1) in zip(digits, ksk.key_data):
    t0 = digit * k0
    t1 = digit * k1
    d0 = t0 if d0 is None else d0 + t0
    d1 = t1 if d1 is None else d1 + t1
  return d0, d1

"""Class encapsulating params for the BGV backend."""

import dataclasses

from privcmp.privcmp_lib import rns_utils

# NTT-friendly primes. Each is 1 mod 2^21, which supports any power-of-two
# ring degree up to 2^20.
DEFAULT_MODULI = (
    998244353,  # 119 * 2^23 + 1
    1004535809,  # 479 * 2^21 + 1
    469762049,  # 7 * 2^26 + 1
    167772161,  # 5 * 2^25 + 1
    754974721,  # 45 * 2^24 + 1
)

# Plaintext coefficients live in int32 arrays; a product of two reduced
# coefficients must not overflow.
MAX_PLAINTEXT_MODULUS = 2**15


@dataclasses.dataclass(frozen=True)
class SchemeParameters:
  """Scheme parameters for BGV over the m'th cyclotomic ring."""

  # the cyclotomic index m. The plaintext ring is Z_{p^r}[X] / Phi_m(X), which
  # is Z_{p^r}[X] / (X^N + 1) when m is a power of two.
  cyclotomic_index: int

  # the prime p of the plaintext modulus p^r
  plaintext_prime: int

  # the Hensel lifting exponent r of the plaintext modulus p^r
  hensel_lifting: int = 1

  # the RNS moduli q_i whose product is the ciphertext modulus Q
  moduli: tuple[int, ...] = DEFAULT_MODULI

  # standard deviation of the rounded Gaussian encryption error
  error_std: float = 3.2

  # the ring degree N = phi(m)
  ring_degree: int = dataclasses.field(init=False)

  # the plaintext modulus p^r
  plaintext_modulus: int = dataclasses.field(init=False)

  def __post_init__(self) -> None:
    if self.plaintext_prime < 2:
      raise ValueError(
          f'`plaintext_prime` must be at least 2, got {self.plaintext_prime}.'
      )
    if self.hensel_lifting < 1:
      raise ValueError(
          f'`hensel_lifting` must be positive, got {self.hensel_lifting}.'
      )
    plaintext_modulus = self.plaintext_prime**self.hensel_lifting
    if plaintext_modulus >= MAX_PLAINTEXT_MODULUS:
      raise ValueError(
          f'Plaintext modulus {plaintext_modulus} must be below'
          f' {MAX_PLAINTEXT_MODULUS}.'
      )
    object.__setattr__(
        self, 'ring_degree', rns_utils.euler_phi(self.cyclotomic_index)
    )
    object.__setattr__(self, 'plaintext_modulus', plaintext_modulus)


def get_params(
    ring_degree: int,
    plaintext_prime: int,
    hensel_lifting: int = 1,
) -> SchemeParameters:
  """Returns parameters for the power-of-two ring of the given degree."""
  if not rns_utils.is_power_of_two(ring_degree):
    raise ValueError(f'`ring_degree` must be a power of two, got {ring_degree}.')
  return SchemeParameters(
      cyclotomic_index=2 * ring_degree,
      plaintext_prime=plaintext_prime,
      hensel_lifting=hensel_lifting,
  )


# The followings are toy parameters that should only be used for testing and
# demos. They provide no security.
TOY_PARAMS = get_params(ring_degree=16, plaintext_prime=257)

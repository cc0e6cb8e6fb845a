"""The modulus that plaintext ring-element arithmetic reduces by.

Ring-element reduction and uniform sampling read the active modulus of an
`ArithmeticContext` rather than taking it as an argument, so code that needs a
different modulus for a short while (e.g. to sample coefficients mod p^r) must
borrow the context: save the active modulus, install its own, and restore the
saved one afterwards. `ArithmeticContext.override` does this as a scope guard.

An override holds the context's lock until it exits, so no two threads can
hold an override of the same context at once. Code running concurrently with
an override on another thread may still observe the overriding modulus if it
reads the context without overriding it; workers that need isolation should
each use their own `ArithmeticContext`.
"""

import contextlib
import dataclasses
import threading
from typing import Iterator, Optional


@dataclasses.dataclass(frozen=True)
class ModulusBackup:
  """A saved modulus, restorable with `ArithmeticContext.restore`."""

  modulus: Optional[int]


class ArithmeticContext:
  """A mutable, lock-guarded holder of the active arithmetic modulus."""

  def __init__(self, modulus: Optional[int] = None) -> None:
    self._modulus = modulus
    self._lock = threading.RLock()

  @property
  def modulus(self) -> Optional[int]:
    """The active modulus, or None if no modulus has been installed."""
    return self._modulus

  def require_modulus(self) -> int:
    if self._modulus is None:
      raise ValueError('No modulus is installed in the arithmetic context.')
    return self._modulus

  def save(self) -> ModulusBackup:
    return ModulusBackup(self._modulus)

  def restore(self, backup: ModulusBackup) -> None:
    with self._lock:
      self._modulus = backup.modulus

  def init(self, modulus: int) -> None:
    """Installs `modulus` as the active modulus, without saving the old one."""
    if modulus < 2:
      raise ValueError(f'Modulus must be at least 2, got {modulus}.')
    with self._lock:
      self._modulus = modulus

  @contextlib.contextmanager
  def override(self, modulus: int) -> Iterator['ArithmeticContext']:
    """Temporarily installs `modulus`, restoring the previous one on exit.

    The previous modulus is restored on every exit path, including when the
    body raises. Overrides nest when entered again by the same thread.

    Args:
      modulus: the modulus to install for the duration of the block.

    Yields:
      This context, with `modulus` active.
    """
    with self._lock:
      backup = self.save()
      self.init(modulus)
      try:
        yield self
      finally:
        self.restore(backup)


# Process-wide context used when callers do not supply their own.
DEFAULT_CONTEXT = ArithmeticContext()

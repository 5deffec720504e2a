"""Warning classes emitted while a trial sequence is assembled.

Nothing in the build step raises: anomalies are emitted with :func:`warnings.warn`
(which ``setup_logging`` routes into the log) and recorded on the resulting
sequence so that callers can inspect them.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass


class ConfigurationWarning(UserWarning):
    """The sequence layout or timing configuration is inconsistent."""


class InsufficientPoolWarning(UserWarning):
    """A question pool holds fewer unique questions than a block needs."""


@dataclass(frozen=True)
class Diagnostic:
    category: type[Warning]
    message: str

    def __str__(self) -> str:
        return f"{self.category.__name__}: {self.message}"


def emit(
    diagnostics: list[Diagnostic] | None,
    category: type[Warning],
    message: str,
    stacklevel: int = 3,
) -> Diagnostic:
    """Warn with ``category`` and append the record to ``diagnostics`` if given."""
    diagnostic = Diagnostic(category, message)
    if diagnostics is not None:
        diagnostics.append(diagnostic)
    warnings.warn(message, category, stacklevel=stacklevel)
    return diagnostic

"""Root of the pedantigo exception hierarchy."""

from __future__ import annotations


class PedantigoError(Exception):
    """Base class for every error raised by pedantigo.

    ``code`` is the stable machine-readable identifier for the failure.
    """

    code: str = ""

"""
Compute backends for pooling.

Public API
----------
- ``register_backend``, ``get_backend``, ``resolve_backend``,
  ``available_backends``
- ``ReferenceBackend`` (``"reference"``), ``NumpyBackend`` (``"numpy"``)
"""

from ._backends import (
    DEFAULT_BACKEND,
    FALLBACK_BACKEND,
    NumpyBackend,
    ReferenceBackend,
    available_backends,
    get_backend,
    register_backend,
    resolve_backend,
)

__all__ = [
    "DEFAULT_BACKEND",
    "FALLBACK_BACKEND",
    NumpyBackend.__name__,
    ReferenceBackend.__name__,
    available_backends.__name__,
    get_backend.__name__,
    register_backend.__name__,
    resolve_backend.__name__,
]

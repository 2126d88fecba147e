"""
KeyInfer: lightweight inference layers for pre-trained Keras-style models.

The package is split into two layers:

- ``keyinfer.domain``: backend-free contracts (Protocols, enums, errors).
- ``keyinfer.infrastructure``: NumPy-backed tensors, kernels and layers.
"""

__version__ = "0.1.0"

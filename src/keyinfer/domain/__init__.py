"""
Domain-level contracts for KeyInfer.

Nothing in this package imports NumPy; it is safe to depend on from any layer.
"""

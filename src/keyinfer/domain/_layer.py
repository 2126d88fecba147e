"""
Layer interface definitions.

This module defines the domain-level contracts a layer must satisfy to be
sequenced by a model execution engine. The contract is split into a small core
(`ILayer`) plus optional capabilities that concrete layers opt into:

- `IWeightBearing`     : layers that own named weight tensors
- `IBackendSelectable` : layers whose computation can run on more than one
  compute backend

Structural typing is used instead of inheritance so that a layer only has to
provide the members it actually needs; a weightless layer such as pooling
still exposes an (empty) weight surface for uniform composition.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol, Sequence, runtime_checkable

from ._tensor import ITensor


@runtime_checkable
class ILayer(Protocol):
    """
    Core layer contract.

    Notes
    -----
    - `call` consumes an input tensor and returns a new output tensor; the
      input tensor is never mutated.
    - `get_config` returns a JSON-serializable dict from which the layer can be
      rebuilt by its class's `from_config`.
    """

    @property
    def name(self) -> str:
        """Unique, human-readable layer name."""
        ...

    def call(self, x: ITensor) -> ITensor:
        """
        Execute the layer's computation.

        Parameters
        ----------
        x : ITensor
            Input tensor.

        Returns
        -------
        ITensor
            Newly allocated output tensor.
        """
        ...

    def get_config(self) -> Dict[str, Any]:
        """Return a JSON-serializable configuration dict."""
        ...


@runtime_checkable
class IWeightBearing(Protocol):
    """
    Capability for layers that own named weights.

    `params` lists weight names in the positional order expected by
    `set_weights`; `weights` maps those names to tensors.
    """

    @property
    def params(self) -> List[str]:
        """Ordered weight names."""
        ...

    @property
    def weights(self) -> Dict[str, ITensor]:
        """Mapping from weight name to tensor."""
        ...

    def set_weights(self, weights: Sequence[ITensor]) -> None:
        """
        Assign weights positionally onto `params`.

        Parameters
        ----------
        weights : Sequence[ITensor]
            One tensor per entry of `params`.
        """
        ...


@runtime_checkable
class IBackendSelectable(Protocol):
    """
    Capability for layers that can switch compute backend.

    A pure in-process fallback backend is always available, so switching can
    never leave a layer without an executable path.
    """

    @property
    def backend(self) -> str:
        """Name of the backend currently used by `call`."""
        ...

    def toggle_compute_backend(self, name: Optional[str] = None) -> str:
        """
        Switch backend.

        Parameters
        ----------
        name : Optional[str]
            Backend to select. If None, toggles between the accelerated and
            the fallback backend.

        Returns
        -------
        str
            Name of the backend now in use.
        """
        ...

"""
Configuration-, shape- and backend-related exceptions for KeyInfer.

These exceptions let layers fail fast and clearly when they are built with an
unsupported configuration, fed a tensor whose geometry cannot be pooled, or
asked to run on a compute backend that does not exist.

None of these errors is recoverable at the layer level; callers are expected
to fix the configuration or input and try again.
"""


class InvalidConfigurationError(ValueError):
    """
    Raised when a layer or option is configured with an unsupported value.

    Typical causes are a reducer that is neither max nor average, a window or
    stride that is not a pair of positive integers, an unknown option
    spelling, or an unknown layer class name.

    Attributes
    ----------
    option : str
        Name of the offending option (e.g., "reducer", "window_size").
    value : object
        The rejected value.
    """

    def __init__(self, option: str, value: object, reason: str = "") -> None:
        """
        Initialize the InvalidConfigurationError.

        Parameters
        ----------
        option : str
            Name of the offending option.
        value : object
            The rejected value.
        reason : str, optional
            Extra detail appended to the message.
        """
        msg = f"Invalid value for '{option}': {value!r}."
        if reason:
            msg = f"{msg} {reason}"
        super().__init__(msg)
        self.option = option
        self.value = value


class DimensionError(ValueError):
    """
    Raised when a tensor's shape is incompatible with the requested operation.

    Examples are a pooling input that is not 3-dimensional, a window larger
    than the padded input (yielding a non-positive output size), or an
    element-wise assignment between tensors of different shapes.
    """

    def __init__(self, op: str, shape: tuple, reason: str) -> None:
        """
        Initialize the DimensionError.

        Parameters
        ----------
        op : str
            Name of the operation that rejected the shape.
        shape : tuple
            The offending shape.
        reason : str
            Human-readable explanation.
        """
        super().__init__(f"{op}: invalid shape {tuple(shape)}. {reason}")
        self.op = op
        self.shape = tuple(shape)


class BackendNotAvailableError(RuntimeError):
    """
    Raised when a compute backend is requested by a name that is not registered.

    Attributes
    ----------
    backend : str
        The requested backend name.
    """

    def __init__(self, backend: str, known: tuple = ()) -> None:
        """
        Initialize the BackendNotAvailableError.

        Parameters
        ----------
        backend : str
            The requested backend name.
        known : tuple, optional
            Names of registered backends, listed in the message.
        """
        super().__init__(
            f"Unknown compute backend '{backend}'. Registered: {sorted(known)}."
        )
        self.backend = backend

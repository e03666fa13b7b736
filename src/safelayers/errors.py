"""safelayers exception hierarchy.

All safelayers-specific exceptions inherit from SafeLayersError. A safety
layer disagreeing with its core is never an exception: it is reported as
data on the returned Decision.
"""


class SafeLayersError(Exception):
    """Base exception for all safelayers errors."""

    def __init__(self, message: str = "", *, retryable: bool = False) -> None:
        super().__init__(message)
        self.retryable = retryable


class ConfigError(SafeLayersError):
    """Invalid or missing configuration."""


class LayerError(SafeLayersError):
    """Invalid safety-layer count or stack shape."""


class MutationError(SafeLayersError):
    """A model cannot be mutated: no mutator was injected and it has no mutate()."""


class ActorMissingError(SafeLayersError):
    """An action was applied to a model without an injected actor."""

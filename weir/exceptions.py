"""Exception types raised by Weir."""

__all__ = [
    'InvalidPartitionSize',
    'NotIterable',
    'RegistryNotEmpty',
    ]


class NotIterable(TypeError):
    """A Stream was constructed from a non-iterable object."""


class InvalidPartitionSize(ValueError):
    """A partitioner was configured with a size that is not a positive int."""


class RegistryNotEmpty(ValueError):
    """A deduplication filter was given a registry that already holds keys."""

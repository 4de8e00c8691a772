"""Pair items with their position in a single pass."""

__all__ = [
    'OrdinalPair',
    'OrdinalPairer',
    'pair_with_ordinal',
    ]

from collections import namedtuple
import logging

from .util import (
    bind_kwargs,
    identity,
    )

logger = logging.getLogger(__name__)


OrdinalPair = namedtuple('OrdinalPair', ['value', 'ordinal'])


class OrdinalPairer:
    """Callable which numbers the items it is called on: 0, 1, 2...

    Each call returns an `OrdinalPair` of `projection(item)` and the next
    unused ordinal.  Ordinals go up by exactly one per successful call.  If
    `projection` raises an exception, no ordinal is used up.

    The counter is not synchronised, and never resets.  Use a pairer for one
    single-threaded pass over one sequence only.  Otherwise, the ordinals do
    not match any one sequence's order.
    """
    def __init__(self, projection=identity):
        self.projection = projection
        self.next_ordinal = 0
        logger.debug("Created ordinal pairer, starting at 0.")

    def __call__(self, item):
        value = self.projection(item)
        ordinal = self.next_ordinal
        self.next_ordinal += 1
        return OrdinalPair(value, ordinal)


def pair_with_ordinal(projection=identity, kwargs=None):
    """Create an `OrdinalPairer`.

    Example: `list(map(pair_with_ordinal(str.upper), 'ab'))` returns
    `[OrdinalPair(value='A', ordinal=0), OrdinalPair(value='B', ordinal=1)]`.

    :param projection: Optional callable to transform each item before
        pairing it with its ordinal.
    :param kwargs: Optional keyword arguments for `projection`.
    :return: OrdinalPairer.
    """
    return OrdinalPairer(bind_kwargs(projection, kwargs))

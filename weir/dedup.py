"""Filters which pass only the first item seen for each key."""

__all__ = [
    'ConcurrentKeySeenRegistry',
    'DedupFilter',
    'KeySeenRegistry',
    'concurrent_dedup_by_key',
    'dedup_by_key',
    ]

import logging
import threading

from .exceptions import RegistryNotEmpty
from .util import (
    bind_kwargs,
    identity,
    )

logger = logging.getLogger(__name__)


class KeySeenRegistry:
    """Set of keys seen so far during one filtering pass.

    Not thread-safe.  Belongs to a single `DedupFilter`.
    """
    def __init__(self):
        self.keys = set()

    def __len__(self):
        return len(self.keys)

    def __contains__(self, key):
        return key in self.keys

    def insert_if_absent(self, key):
        """Add key, unless it is already present.

        :return: bool: Was key newly added?
        """
        if key in self.keys:
            return False
        self.keys.add(key)
        return True


class ConcurrentKeySeenRegistry(KeySeenRegistry):
    """Thread-safe `KeySeenRegistry`.

    Any number of threads may call `insert_if_absent` at the same time.  For
    each distinct key, exactly one of those calls returns True.
    """
    def __init__(self):
        super(ConcurrentKeySeenRegistry, self).__init__()
        self.lock = threading.Lock()

    def __len__(self):
        with self.lock:
            return len(self.keys)

    def __contains__(self, key):
        with self.lock:
            return key in self.keys

    def insert_if_absent(self, key):
        with self.lock:
            return super(ConcurrentKeySeenRegistry, self).insert_if_absent(
                key)


class DedupFilter:
    """Predicate: is this the first item with its key?

    Calling the filter on an item computes `key(item)` and records it.  The
    result is True if no earlier call saw the same key, or False otherwise.
    Only the keys are kept, not the items.

    Exceptions from `key` propagate unchanged, and leave the registry as it
    was.

    A filter is meant for one pass over one sequence.  Create a new one for
    every pass.
    """
    def __init__(self, key=identity, registry=None):
        """Initialise a filter.

        :param key: Callable which computes a hashable key for an item.
        :param registry: Optional empty `KeySeenRegistry` to use.  Defaults
            to a new, non-thread-safe one.  The filter takes it over; do not
            pass the same registry to another filter.
        :raises RegistryNotEmpty: If `registry` already holds keys.
        """
        if registry is None:
            registry = KeySeenRegistry()
        elif len(registry) != 0:
            raise RegistryNotEmpty(
                "Deduplication filter needs an empty registry, not one "
                "holding %d key(s)." % len(registry))
        self.key = key
        self.registry = registry
        logger.debug(
            "Created deduplication filter on %s.", type(registry).__name__)

    def __call__(self, item):
        return self.registry.insert_if_absent(self.key(item))


def dedup_by_key(key=identity, kwargs=None):
    """Create a filter which passes the first item for each `key(item)`.

    Use it with `filter`, or `Stream.keep_if`:

        list(filter(dedup_by_key(len), ['a', 'bb', 'c', 'dd', 'eee']))

    returns `['a', 'bb', 'eee']`.

    The filter is not thread-safe.  If the items may be checked from
    multiple threads, use `concurrent_dedup_by_key` instead.

    :param key: Callable which computes a hashable key for an item.  Defaults
        to the item itself.
    :param kwargs: Optional keyword arguments for `key`.
    :return: DedupFilter.
    """
    return DedupFilter(bind_kwargs(key, kwargs), KeySeenRegistry())


def concurrent_dedup_by_key(key=identity, kwargs=None):
    """Like `dedup_by_key`, but safe for use from multiple threads.

    For each distinct key, exactly one item is accepted.  When items arrive
    from several threads, which of the items with a given key wins is
    arbitrary; it need not be the first in the original sequence.

    :return: DedupFilter.
    """
    return DedupFilter(bind_kwargs(key, kwargs), ConcurrentKeySeenRegistry())

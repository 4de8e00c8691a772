"""Fluent stream API for driving Weir's primitives."""

__all__ = [
    'Stream',
    'to_partitioned_stream',
    ]

from concurrent.futures import ThreadPoolExecutor
from itertools import filterfalse
import logging

from .dedup import (
    concurrent_dedup_by_key,
    dedup_by_key,
    )
from .exceptions import NotIterable
from .fold import (
    BatchPartitioner,
    to_partitioned_list,
    )
from .ordinal import pair_with_ordinal
from .util import (
    bind_kwargs,
    identity,
    )

logger = logging.getLogger(__name__)


class Stream:
    """Stream class.

    Lets you filter, number, and fold anything that's iterable, using a
    "fluent" interface.  Any Stream object wraps a sequence of items.

    Streams are iterated lazily except where specified.  Nothing happens, and
    your callbacks are not called, until you do something which pulls items
    from the stream.  Operations which return a stream are generally
    nonterminal; operations which return anything else are terminal, and
    read the items right away.

    Several operations here carry state from one item to the next: `distinct`
    remembers the keys it has seen, `pair_with_ordinal` counts, and
    `partition` gathers items into batches.  Each call to such an operation
    starts with fresh state, so two streams never share it.

    Many methods take both a function and a "kwargs" as parameters.  That's
    shorthand for parameter binding: "call this function, with these keyword
    arguments."  It binds only keyword arguments.

        stream.distinct(round, {'ndigits': 1})
    """
    def __init__(self, iterable=(), based_on=None):
        """Initialise a new stream.

        :param iterable: Anything that can be iterated: a list, a generator,
            a set, a range, a view, a string.
        :param based_on: Optional original stream on which the new one is
            based.  Normally only used from within the `Stream` class.
        :raises NotIterable: If `iterable` is not actually an iterable.
        """
        super(Stream, self).__init__()

        # Keep the whole chain of streams alive while we iterate.
        self.based_on = based_on
        self.iterable = iterable

        try:
            self.iterator = iter(iterable)
        except TypeError as e:
            raise NotIterable(str(e))

    def __iter__(self):
        return self.iterator

    def __next__(self):
        """Consume next item, and return it; or raise StopIteration."""
        return next(self.iterator)

    def evolve(self, iterable):
        """Create a new instance based on the current one."""
        return type(self)(iterable, based_on=self)

    def into(self, callee, kwargs=None):
        """Invoke `callee` on the stream's iterable as a whole, return result.

        Example: `stream.into(list)` returns the stream's contents as a `list`.

        Terminal.

        :return: Whatever callee returns.
        """
        call = bind_kwargs(callee, kwargs)
        return call(self.iterator)

    def apply(self, callee, kwargs=None):
        """Apply callee to iterable, wrap result as new stream.

        The `callee` takes an iterable as its argument and returns another
        iterable.  Example: `stream.apply(sorted)`.

        Terminal, if `callee` reads the items in the stream.
        """
        return self.evolve(self.into(callee, kwargs))

    def list(self):
        """Return all items as a list.

        Terminal.

        :return: list.
        """
        return self.into(list)

    def count(self):
        """Return number of items.

        Terminal.

        :return: int.
        """
        return sum(1 for _ in self)

    def for_each(self, function, kwargs=None):
        """Execute function(item) for each item.

        Terminal.
        """
        call = bind_kwargs(function, kwargs)
        for item in self.iterator:
            call(item)

    def keep_if(self, criterion=identity, kwargs=None):
        """Filter, keeping only items for which criterion(item) is true.

        :return: Stream.
        """
        return self.evolve(
            filter(bind_kwargs(criterion, kwargs), self.iterator))

    def drop_if(self, criterion=identity, kwargs=None):
        """Drop any items for which criterion(item) is true.

        This is the opposite of `keep_if`.

        :return: Stream.
        """
        return self.evolve(
            filterfalse(bind_kwargs(criterion, kwargs), self.iterator))

    def map(self, function, kwargs=None):
        """Transform stream: apply function to each item.

        :return: Stream.
        """
        return self.evolve(map(bind_kwargs(function, kwargs), self.iterator))

    def parallel_keep_if(self, criterion=identity, kwargs=None, workers=None):
        """Like `keep_if`, but evaluate criterion on a pool of threads.

        Reads all items into memory, and calls `criterion(item)` for each of
        them from worker threads, in no particular order.  The criterion must
        be safe to call from multiple threads at once.  The resulting stream
        yields the kept items in their original order.

        If any call to criterion raises an exception, that exception
        propagates from this method.

        Terminal.

        :param workers: Maximum number of worker threads.  Defaults to the
            `ThreadPoolExecutor` default.
        :return: Stream.
        """
        call = bind_kwargs(criterion, kwargs)
        items = list(self.iterator)
        logger.debug(
            "Filtering %d item(s) on thread pool (max_workers=%s).",
            len(items), workers)
        with ThreadPoolExecutor(max_workers=workers) as executor:
            verdicts = list(executor.map(call, items))
        return self.evolve(
            item for item, keep in zip(items, verdicts) if keep)

    def distinct(self, key=identity, kwargs=None, parallel=False,
                 workers=None):
        """Drop any items whose `key(item)` came up for an earlier item.

        Repeats need not be consecutive to be dropped:
        `Stream([1, 2, 1, 3]).distinct().list()` returns `[1, 2, 3]`.  The
        keys must be hashable.

        By default this is lazy and sequential; the item which stays is the
        first one with its key.  With `parallel=True`, keys are computed and
        checked on a thread pool (see `parallel_keep_if`).  Exactly one item
        per key stays, but it may not be the first one.

        :param key: Callable computing an item's key.  Defaults to the item
            itself.
        :param parallel: Check items on a thread pool?
        :param workers: Maximum number of worker threads, if parallel.
        :return: Stream.
        """
        if parallel:
            return self.parallel_keep_if(
                concurrent_dedup_by_key(key, kwargs), workers=workers)
        else:
            return self.keep_if(dedup_by_key(key, kwargs))

    def pair_with_ordinal(self, projection=identity, kwargs=None):
        """Pair each item with its position in this stream: 0, 1, 2...

        Yields `OrdinalPair(value, ordinal)` tuples, where `value` is
        `projection(item)`.

        :return: Stream.
        """
        return self.map(pair_with_ordinal(projection, kwargs))

    def collect(self, fold):
        """Fold all items using a `Fold`, e.g. a partitioner.

        Terminal.

        :return: Whatever the fold produces.
        """
        return fold.reduce(self.iterator)

    def partition(self, size, finish=None):
        """Gather items into consecutive lists of `size` items.

        The last list may be shorter.  An empty stream gives an empty list.

        Example: `Stream(range(5)).partition(2)` returns
        `[[0, 1], [2, 3], [4]]`.

        Terminal.

        :param size: Maximum number of items per list.
        :param finish: Optional transform of the resulting list of lists.
        :raises InvalidPartitionSize: If size is not a positive integer.
            This happens before any items are read.
        :return: list of lists, or whatever `finish` returns.
        """
        return self.collect(BatchPartitioner(size, finish))


def to_partitioned_stream(iterable, size):
    """Split iterable into a stream of lists of at most `size` items each.

    A `None` iterable counts as empty.  Reads all items right away.

    :raises InvalidPartitionSize: If `size` is not a positive integer.
    :return: Stream.
    """
    return Stream(to_partitioned_list(iterable, size))

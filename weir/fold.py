"""Reusable folds, and the batch partitioner built on them."""

__all__ = [
    'BatchPartitioner',
    'Fold',
    'PartitionState',
    'merge_partition_states',
    'partition',
    'to_partitioned_list',
    ]

import functools
import logging

from .exceptions import InvalidPartitionSize
from .util import (
    default_iterable,
    identity,
    )

logger = logging.getLogger(__name__)


class Fold:
    """A reduction in three steps, plus a final transform.

    A fold consists of:

     * `new_state()`, which creates an empty accumulation state.
     * `accumulate(state, item)`, which adds one item to a state, in place.
     * `merge(left, right)`, which combines two states and returns the
       result.  It may modify and return `left`.
     * `finish(state)`, which turns a completed state into the result.

    Splitting the work this way lets the same fold run as a plain sequential
    loop (`reduce`), or over separately filled chunks whose states get merged
    afterwards (`reduce_chunks`).  Whether the latter gives the same answer as
    the former depends on the fold's `merge`.
    """
    def __init__(self, new_state, accumulate, merge, finish=None):
        if finish is None:
            finish = identity
        self.new_state = new_state
        self.accumulate = accumulate
        self.merge = merge
        self.finish = finish

    def fill(self, iterable):
        """Accumulate all items from iterable into a new state; return it."""
        state = self.new_state()
        for item in iterable:
            self.accumulate(state, item)
        return state

    def reduce(self, iterable):
        """Fold all items from iterable, in order.

        :return: Whatever `finish` makes of the filled state.
        """
        return self.finish(self.fill(iterable))

    def reduce_chunks(self, chunks):
        """Fill one state per chunk, merge them in order, and finish.

        Each chunk is an iterable.  The chunks are merged left to right,
        starting from an empty state, so no chunks at all give the same
        result as an empty iterable.

        :return: Whatever `finish` makes of the merged state.
        """
        states = [self.fill(chunk) for chunk in chunks]
        return self.finish(
            functools.reduce(self.merge, states, self.new_state()))


class PartitionState:
    """Accumulation state for `BatchPartitioner`.

    :ivar partitions: List of lists of items, in encounter order.
    :ivar fill_count: Number of items in the open partition.  Wraps back to
        zero when the partition is full.
    :ivar open_partition_index: Index of the partition currently being
        filled.
    """
    def __init__(self):
        self.partitions = []
        self.fill_count = 0
        self.open_partition_index = 0

    def __repr__(self):
        return "<PartitionState: %d partition(s), %d in open partition>" % (
            len(self.partitions), self.fill_count)


def merge_partition_states(left, right):
    """Append `right`'s partitions to `left`'s.  Return `left`.

    This is plain concatenation.  It gives correct partitions only if `left`
    and `right` were filled from contiguous, consecutive runs of items, and
    `left`'s last partition is full.  That is not checked.  If `left` ends in
    a short partition, the merged result will have a short partition
    somewhere other than at the end.

    After merging, `left` continues filling `right`'s last partition.
    """
    left.partitions.extend(right.partitions)
    if right.partitions:
        left.fill_count = right.fill_count
        left.open_partition_index = len(left.partitions) - 1
    return left


class BatchPartitioner(Fold):
    """Fold items into a list of lists of at most `size` items each.

    Concatenating the partitions reproduces the original items in their
    original order.  Every partition but the last holds exactly `size`
    items; the last holds anywhere from 1 to `size`.  No items means no
    partitions.

    That holds for sequential folding.  For chunked folding (see
    `merge_partition_states`), each chunk except the last must contain a
    multiple of `size` items.
    """
    def __init__(self, size, finish=None):
        """Initialise a partitioner.

        :param size: Maximum number of items per partition.  Must be an
            integer greater than zero.
        :param finish: Optional callable which transforms the final list of
            partitions into the fold's result.  None means the list itself.
        :raises InvalidPartitionSize: If `size` is not a positive integer.
        """
        check_partition_size(size)
        if finish is None:
            finish = identity
        self.size = size
        self.finish_partitions = finish
        super(BatchPartitioner, self).__init__(
            PartitionState, self.add_item, merge_partition_states,
            self.finish_state)
        logger.debug("Created partitioner with partition size %d.", size)

    def add_item(self, state, item):
        """Add item to state, opening a new partition if needed."""
        if state.fill_count % self.size == 0:
            state.fill_count = 0
            state.open_partition_index = len(state.partitions)
            state.partitions.append([])
        state.partitions[state.open_partition_index].append(item)
        state.fill_count += 1

    def finish_state(self, state):
        return self.finish_partitions(state.partitions)


def check_partition_size(size):
    """Raise `InvalidPartitionSize` unless size is a positive int."""
    if isinstance(size, bool) or not isinstance(size, int):
        raise InvalidPartitionSize(
            "Partition size must be an integer, not %r." % (size, ))
    if size <= 0:
        raise InvalidPartitionSize(
            "Partition size must be greater than zero, not %d." % size)


def partition(size, finish=None):
    """Create a `BatchPartitioner` fold.

    Fails right away if `size` is invalid, not when the fold first sees an
    item.

    Example: convert each partition to a tuple.

        partition(3, lambda parts: [tuple(part) for part in parts])

    :param size: Maximum number of items per partition.
    :param finish: Optional transform of the final list of partitions.
    :raises InvalidPartitionSize: If `size` is not a positive integer.
    :return: BatchPartitioner.
    """
    return BatchPartitioner(size, finish)


def to_partitioned_list(iterable, size):
    """Split iterable into a list of lists of at most `size` items each.

    A `None` iterable counts as empty.

    :raises InvalidPartitionSize: If `size` is not a positive integer.
    :return: list of lists.
    """
    return partition(size).reduce(default_iterable(iterable))

"""Tests for folds and the batch partitioner."""

from array import array
from itertools import chain
from unittest import TestCase

from .factory import (
    make_list,
    make_num,
    make_size,
    )
from weir.exceptions import InvalidPartitionSize
from weir.fold import (
    BatchPartitioner,
    Fold,
    PartitionState,
    merge_partition_states,
    partition,
    to_partitioned_list,
    )


def make_summing_fold():
    """Return a `Fold` which adds up numbers, keeping its total in a list."""
    def accumulate(state, item):
        state[0] += item

    def merge(left, right):
        left[0] += right[0]
        return left

    return Fold(lambda: [0], accumulate, merge, lambda state: state[0])


class TestFold(TestCase):
    """Tests for the generic `Fold`."""
    def test_reduce_runs_all_steps(self):
        items = make_list()
        self.assertEqual(make_summing_fold().reduce(items), sum(items))

    def test_reduce_of_empty_iterable_finishes_new_state(self):
        self.assertEqual(make_summing_fold().reduce([]), 0)

    def test_finish_defaults_to_identity(self):
        fold = Fold(list, list.append, lambda left, right: left + right)
        self.assertEqual(fold.reduce(iter('abc')), ['a', 'b', 'c'])

    def test_None_finish_means_identity(self):
        fold = Fold(list, list.append, lambda left, right: left, None)
        self.assertEqual(fold.reduce('ab'), ['a', 'b'])

    def test_fill_returns_unfinished_state(self):
        self.assertEqual(make_summing_fold().fill([1, 2, 3]), [6])

    def test_reduce_chunks_merges_all_chunks(self):
        chunks = [make_list(min=0) for _ in range(make_num(max=5))]
        self.assertEqual(
            make_summing_fold().reduce_chunks(chunks),
            sum(chain.from_iterable(chunks)))

    def test_reduce_chunks_without_chunks_finishes_new_state(self):
        self.assertEqual(make_summing_fold().reduce_chunks([]), 0)

    def test_propagates_exception_from_accumulate(self):
        class Failure(Exception):
            pass

        def fail(state, item):
            raise Failure()

        fold = Fold(list, fail, lambda left, right: left)
        self.assertRaises(Failure, fold.reduce, [1])


class TestPartition(TestCase):
    """Tests for `partition` and `BatchPartitioner`."""
    def test_returns_batch_partitioner(self):
        partitioner = partition(3)
        self.assertIsInstance(partitioner, BatchPartitioner)
        self.assertIsInstance(partitioner, Fold)
        self.assertEqual(partitioner.size, 3)

    def test_partitions_in_order(self):
        self.assertEqual(
            partition(2).reduce([1, 2, 3, 4, 5]),
            [[1, 2], [3, 4], [5]])

    def test_empty_input_gives_no_partitions(self):
        self.assertEqual(partition(3).reduce([]), [])

    def test_exact_multiple_fills_all_partitions(self):
        self.assertEqual(
            partition(3).reduce(range(6)),
            [[0, 1, 2], [3, 4, 5]])

    def test_size_larger_than_input_gives_one_partition(self):
        items = make_list(max=5)
        self.assertEqual(partition(10).reduce(items), [items])

    def test_size_one_gives_singletons(self):
        items = make_list()
        self.assertEqual(
            partition(1).reduce(items),
            [[item] for item in items])

    def test_concatenation_reproduces_input(self):
        for _ in range(20):
            items = make_list(min=0, max=30)
            partitions = partition(make_size()).reduce(items)
            self.assertEqual(list(chain.from_iterable(partitions)), items)

    def test_only_last_partition_may_be_short(self):
        for _ in range(20):
            size = make_size()
            items = make_list(min=1, max=30)
            partitions = partition(size).reduce(items)
            self.assertNotEqual(partitions, [])
            for part in partitions[:-1]:
                self.assertEqual(len(part), size)
            self.assertGreaterEqual(len(partitions[-1]), 1)
            self.assertLessEqual(len(partitions[-1]), size)

    def test_consumes_iterator(self):
        self.assertEqual(
            partition(2).reduce(iter('abcde')),
            [['a', 'b'], ['c', 'd'], ['e']])

    def test_rejects_zero_size_at_construction(self):
        self.assertRaises(InvalidPartitionSize, partition, 0)

    def test_rejects_negative_size_at_construction(self):
        self.assertRaises(InvalidPartitionSize, partition, -1)
        self.assertRaises(InvalidPartitionSize, BatchPartitioner, -1)

    def test_rejects_non_integer_size(self):
        self.assertRaises(InvalidPartitionSize, partition, 1.5)
        self.assertRaises(InvalidPartitionSize, partition, '2')
        self.assertRaises(InvalidPartitionSize, partition, None)
        self.assertRaises(InvalidPartitionSize, partition, True)

    def test_invalid_size_is_a_ValueError(self):
        self.assertRaises(ValueError, partition, 0)

    def test_can_be_reused(self):
        partitioner = partition(2)
        self.assertEqual(partitioner.reduce([1, 2, 3]), [[1, 2], [3]])
        self.assertEqual(partitioner.reduce([4, 5, 6]), [[4, 5], [6]])

    def test_states_are_independent(self):
        partitioner = partition(2)
        first = partitioner.new_state()
        second = partitioner.new_state()
        partitioner.accumulate(first, 1)
        partitioner.accumulate(second, 2)
        partitioner.accumulate(second, 3)
        partitioner.accumulate(first, 4)
        self.assertEqual(first.partitions, [[1, 4]])
        self.assertEqual(second.partitions, [[2, 3]])

    def test_accumulate_tracks_counters(self):
        partitioner = partition(2)
        state = partitioner.new_state()
        for item in range(3):
            partitioner.accumulate(state, item)
        self.assertEqual(state.fill_count, 1)
        self.assertEqual(state.open_partition_index, 1)

    def test_None_finish_gives_partitions(self):
        self.assertEqual(
            partition(2, None).reduce([1, 2, 3]), [[1, 2], [3]])
        self.assertEqual(
            BatchPartitioner(2, finish=None).reduce_chunks([[1, 2], [3]]),
            [[1, 2], [3]])

    def test_logs_construction(self):
        with self.assertLogs('weir.fold', level='DEBUG') as logs:
            partition(4)
        self.assertIn('partition size 4', logs.output[0])

    def test_applies_finish(self):
        partitioner = partition(
            2, lambda parts: [array('i', part) for part in parts])
        self.assertEqual(
            partitioner.reduce([1, 2, 3]),
            [array('i', [1, 2]), array('i', [3])])

    def test_reduce_chunks_with_aligned_chunks_matches_sequential(self):
        size = make_size()
        items = list(range(make_num(min=0, max=40)))
        chunks = [
            items[start:start + 2 * size]
            for start in range(0, len(items), 2 * size)
            ]
        self.assertEqual(
            partition(size).reduce_chunks(chunks),
            partition(size).reduce(items))

    def test_reduce_chunks_does_not_repair_short_partition(self):
        # Merging after a partly filled partition leaves it short.
        self.assertEqual(
            partition(2).reduce_chunks([[1, 2, 3], [4, 5]]),
            [[1, 2], [3], [4, 5]])


class TestMergePartitionStates(TestCase):
    """Tests for `merge_partition_states`."""
    def test_concatenates_partitions(self):
        partitioner = partition(2)
        left = partitioner.fill([1, 2])
        right = partitioner.fill([3, 4, 5])
        merged = merge_partition_states(left, right)
        self.assertIs(merged, left)
        self.assertEqual(merged.partitions, [[1, 2], [3, 4], [5]])

    def test_continues_filling_right_state(self):
        partitioner = partition(2)
        merged = merge_partition_states(
            partitioner.fill([1, 2]), partitioner.fill([3]))
        partitioner.accumulate(merged, 4)
        partitioner.accumulate(merged, 5)
        self.assertEqual(merged.partitions, [[1, 2], [3, 4], [5]])

    def test_merging_empty_right_state_changes_nothing(self):
        partitioner = partition(3)
        left = partitioner.fill([1, 2])
        merge_partition_states(left, PartitionState())
        partitioner.accumulate(left, 3)
        self.assertEqual(left.partitions, [[1, 2, 3]])

    def test_merging_into_empty_state(self):
        partitioner = partition(2)
        merged = merge_partition_states(
            PartitionState(), partitioner.fill([1, 2, 3]))
        self.assertEqual(merged.partitions, [[1, 2], [3]])
        self.assertEqual(merged.fill_count, 1)
        self.assertEqual(merged.open_partition_index, 1)


class TestPartitionState(TestCase):
    """Tests for `PartitionState`."""
    def test_starts_empty(self):
        state = PartitionState()
        self.assertEqual(state.partitions, [])
        self.assertEqual(state.fill_count, 0)
        self.assertEqual(state.open_partition_index, 0)

    def test_repr_shows_progress(self):
        state = partition(2).fill([1, 2, 3])
        self.assertEqual(
            repr(state),
            "<PartitionState: 2 partition(s), 1 in open partition>")


class TestToPartitionedList(TestCase):
    """Tests for `to_partitioned_list`."""
    def test_partitions_iterable(self):
        self.assertEqual(
            to_partitioned_list(range(7), 3),
            [[0, 1, 2], [3, 4, 5], [6]])

    def test_treats_None_as_empty(self):
        self.assertEqual(to_partitioned_list(None, 3), [])

    def test_rejects_invalid_size_even_if_empty(self):
        self.assertRaises(InvalidPartitionSize, to_partitioned_list, [], 0)
        self.assertRaises(InvalidPartitionSize, to_partitioned_list, None, -1)

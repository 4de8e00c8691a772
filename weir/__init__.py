"""Stateful stream primitives: batching, deduplication, and numbering."""

from .dedup import (
    ConcurrentKeySeenRegistry,
    DedupFilter,
    KeySeenRegistry,
    concurrent_dedup_by_key,
    dedup_by_key,
    )
from .exceptions import (
    InvalidPartitionSize,
    NotIterable,
    RegistryNotEmpty,
    )
from .fold import (
    BatchPartitioner,
    Fold,
    partition,
    to_partitioned_list,
    )
from .main import (
    Stream,
    to_partitioned_stream,
    )
from .ordinal import (
    OrdinalPair,
    OrdinalPairer,
    pair_with_ordinal,
    )
from .util import identity

__all__ = [
    'BatchPartitioner',
    'ConcurrentKeySeenRegistry',
    'DedupFilter',
    'Fold',
    'identity',
    'InvalidPartitionSize',
    'KeySeenRegistry',
    'NotIterable',
    'OrdinalPair',
    'OrdinalPairer',
    'RegistryNotEmpty',
    'Stream',
    'concurrent_dedup_by_key',
    'dedup_by_key',
    'pair_with_ordinal',
    'partition',
    'to_partitioned_list',
    'to_partitioned_stream',
    ]

"""
Offline Distinct-Count Range Queries

Answers "how many distinct values are in source[start..end]?" for a whole batch
of queries with one left-to-right sweep over the source sequence.

Algorithm:
1. Sort queries by end index
2. Sweep phase_end = 0..n-1, keeping a Fenwick tree of 0/1 markers where a 1
   means "this position is the latest occurrence of its value so far"
3. When the sweep reaches a query's end index, the sum of markers in
   [start, phase_end] is the distinct count of that range

Total: O((n + q) log n) time, O(n) extra space.
"""

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

from fenwick_tree import FenwickTree

logger = logging.getLogger(__name__)


class InvalidQueryError(ValueError):
    """Raised when a query batch violates its bounds or result-slot contract."""


@dataclass(frozen=True)
class DistinctCountQuery:
    """A distinct-count request over source[start_index..end_index] (0-based, inclusive)."""
    start_index: int
    end_index: int
    result_index: int


def make_queries(pairs: Iterable[Tuple[int, int]], one_based: bool = False) -> List[DistinctCountQuery]:
    """
    Build query records from (start, end) pairs.

    Result slots are assigned in input order.

    Args:
        pairs: Iterable of (start, end) index pairs
        one_based: Whether the pairs use 1-based indices

    Returns:
        List of DistinctCountQuery
    """
    offset = 1 if one_based else 0
    return [
        DistinctCountQuery(start - offset, end - offset, result_index)
        for result_index, (start, end) in enumerate(pairs)
    ]


def validate_queries(sequence_length: int, queries: Sequence[DistinctCountQuery]):
    """
    Check bounds and result slots of a query batch.

    Raises:
        InvalidQueryError: if a query falls outside [0, sequence_length) or has
            start > end, or if result slots are not exactly 0..len(queries)-1
    """
    for query in queries:
        if not 0 <= query.start_index <= query.end_index < sequence_length:
            raise InvalidQueryError(
                f"Query bounds [{query.start_index}, {query.end_index}] invalid "
                f"for sequence of length {sequence_length}"
            )

    slots = Counter(query.result_index for query in queries)
    duplicates = [slot for slot, count in slots.items() if count > 1]
    if duplicates:
        raise InvalidQueryError(f"Duplicate result slots: {sorted(duplicates)}")

    out_of_range = [slot for slot in slots if not 0 <= slot < len(queries)]
    if out_of_range:
        raise InvalidQueryError(
            f"Result slots {sorted(out_of_range)} outside [0, {len(queries)})"
        )


def solve(source_sequence: Sequence[int],
          queries: Sequence[DistinctCountQuery],
          validate: bool = False) -> List[int]:
    """
    Answer every distinct-count query in one offline sweep.

    Args:
        source_sequence: Values to query; must not change during the call
        queries: Query batch; each answer lands at its result_index
        validate: Check bounds and result slots before solving

    Returns:
        List of distinct counts, indexed by result slot
    """
    if validate:
        validate_queries(len(source_sequence), queries)

    results = [0] * len(queries)
    ordered = sorted(queries, key=lambda query: query.end_index)
    logger.debug(f"Solving {len(ordered)} queries over {len(source_sequence)} values")

    latest_markers = FenwickTree(len(source_sequence))
    latest_occurrence: Dict[int, int] = {}
    query_cursor = 0

    phase_end = 0
    while phase_end < len(source_sequence) and query_cursor < len(ordered):
        value = source_sequence[phase_end]

        # The previous occurrence is no longer the latest one
        previous = latest_occurrence.get(value)
        if previous is not None:
            latest_markers.point_update(previous, -1)
        latest_markers.point_update(phase_end, 1)
        latest_occurrence[value] = phase_end

        while query_cursor < len(ordered) and ordered[query_cursor].end_index == phase_end:
            query = ordered[query_cursor]
            results[query.result_index] = latest_markers.range_sum(query.start_index, phase_end)
            query_cursor += 1

        phase_end += 1

    return results


def brute_force_distinct_counts(source_sequence: Sequence[int],
                                queries: Sequence[DistinctCountQuery]) -> List[int]:
    """Reference answers by building a set per query, O(n * q)."""
    results = [0] * len(queries)
    for query in queries:
        window = source_sequence[query.start_index:query.end_index + 1]
        results[query.result_index] = len(set(window))
    return results


def demo_distinct_count():
    """Run the engine on a small example and compare with brute force."""
    sequence = [1, 1, 2, 1, 3]
    queries = make_queries([(1, 4), (0, 0), (0, 4), (2, 3)])

    fast = solve(sequence, queries)
    slow = brute_force_distinct_counts(sequence, queries)

    print("Distinct Count Walkthrough:")
    print("-" * 50)
    print(f"Sequence: {sequence}")
    for query in queries:
        answer = fast[query.result_index]
        status = "✓" if answer == slow[query.result_index] else "✗"
        print(f"{status} distinct[{query.start_index}..{query.end_index}] = {answer}")


if __name__ == "__main__":
    demo_distinct_count()

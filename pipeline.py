"""
Main Pipeline - Offline Distinct-Count Queries over Integer Batches

This is the main entry point that integrates:
1. Buffered integer input (fast_io.IntReader)
2. Query batch construction (1-based pairs → 0-based queries)
3. Offline sweep with a Fenwick tree (distinct_count.solve)
4. Buffered answer output (fast_io.IntWriter)
5. Randomized cross-checking against a brute-force reference

Input format:
    n
    a_1 a_2 ... a_n
    q
    l_1 r_1
    ...
    l_q r_q

Usage:
    python pipeline.py --mode solve < input.txt
    python pipeline.py --mode solve --input input.txt --output answers.txt
    python pipeline.py --mode verify --trials 50 --seed 7
    python pipeline.py --mode demo
"""

import argparse
import contextlib
import io
import logging
import os
import sys
import time
from typing import BinaryIO, Dict, List, Optional, Sequence, Tuple

import numpy as np
import yaml

from distinct_count import (
    DistinctCountQuery,
    brute_force_distinct_counts,
    make_queries,
    solve,
)
from fast_io import IntReader, IntWriter

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

DEMO_INPUT = b"5\n1 1 2 1 3\n3\n1 5\n2 4\n3 5\n"


class DistinctQueryPipeline:
    """
    Read a query batch, answer it offline, write the answers in input order.
    """

    def __init__(self, config_path: str = "config.yaml"):
        self.config = self._load_config(config_path)

    def _load_config(self, config_path: str) -> Dict:
        """Load configuration, filling missing keys from the defaults."""
        config = self._default_config()

        if not os.path.exists(config_path):
            logger.warning(f"No config file found at {config_path}, using defaults")
            return config

        with open(config_path, 'r') as f:
            loaded = yaml.safe_load(f) or {}

        for section, values in loaded.items():
            # An empty or fully commented-out section keeps its defaults
            if values is None:
                continue
            if isinstance(values, dict) and isinstance(config.get(section), dict):
                config[section].update(values)
            else:
                config[section] = values

        logger.info(f"Loaded config from {config_path}")
        return config

    def _default_config(self) -> Dict:
        """Default configuration."""
        return {
            'io': {
                'input_buffer_size': 8192,
                'output_buffer_size': 8192
            },
            'solver': {
                'validate': False
            },
            'verify': {
                'trials': 20,
                'max_sequence_length': 200,
                'max_query_count': 200,
                'value_range': 10,
                'seed': 0
            },
            'logging': {
                'level': 'INFO'
            }
        }

    def read_batch(self, reader: IntReader) -> Tuple[List[int], List[DistinctCountQuery]]:
        """
        Read the sequence and the 1-based query pairs.

        Returns:
            (sequence, queries) with queries converted to 0-based indices
        """
        sequence_length = reader.read_non_negative_int()
        sequence = reader.read_ints(sequence_length)

        query_count = reader.read_non_negative_int()
        pairs = [
            (reader.read_non_negative_int(), reader.read_non_negative_int())
            for _ in range(query_count)
        ]
        return sequence, make_queries(pairs, one_based=True)

    def write_results(self, writer: IntWriter, results: Sequence[int]):
        """Write one answer per line; the caller flushes."""
        for result in results:
            writer.write_non_negative_int(result)
            writer.write_line()

    def run(self, input_stream: BinaryIO, output_stream: BinaryIO,
            validate: Optional[bool] = None) -> List[int]:
        """
        Execute one batch end to end.

        Args:
            input_stream: Binary stream with the batch
            output_stream: Binary stream receiving the answers
            validate: Override solver.validate from the config

        Returns:
            The answers in query input order
        """
        if validate is None:
            validate = self.config['solver']['validate']

        reader = IntReader(input_stream, self.config['io']['input_buffer_size'])

        start_time = time.time()
        sequence, queries = self.read_batch(reader)
        read_time = time.time() - start_time
        logger.info(f"Read {len(sequence)} values and {len(queries)} queries in {read_time*1000:.2f}ms")

        start_time = time.time()
        results = solve(sequence, queries, validate=validate)
        solve_time = time.time() - start_time
        logger.info(f"Answered {len(results)} queries in {solve_time*1000:.2f}ms")

        with IntWriter(output_stream, self.config['io']['output_buffer_size']) as writer:
            self.write_results(writer, results)
        return results

    def generate_batch(self, sequence_length: int, query_count: int,
                       value_range: int, rng: np.random.Generator
                       ) -> Tuple[List[int], List[DistinctCountQuery]]:
        """
        Random sequence over [0, value_range) plus random valid queries.
        """
        sequence = rng.integers(0, value_range, size=sequence_length).tolist()

        ends = rng.integers(0, sequence_length, size=query_count)
        starts = [int(rng.integers(0, end + 1)) for end in ends]
        pairs = list(zip(starts, ends.tolist()))
        return sequence, make_queries(pairs)

    def verify(self, trials: Optional[int] = None, seed: Optional[int] = None) -> Dict:
        """
        Compare the offline sweep with brute force on random batches.

        Returns:
            Report with trial, query and mismatch counts
        """
        settings = self.config['verify']
        trials = settings['trials'] if trials is None else trials
        seed = settings['seed'] if seed is None else seed
        rng = np.random.default_rng(seed)

        report = {'trials': trials, 'queries': 0, 'mismatches': 0}
        for trial in range(trials):
            sequence_length = int(rng.integers(1, settings['max_sequence_length'] + 1))
            query_count = int(rng.integers(1, settings['max_query_count'] + 1))
            sequence, queries = self.generate_batch(
                sequence_length, query_count, settings['value_range'], rng
            )

            fast = solve(sequence, queries, validate=True)
            slow = brute_force_distinct_counts(sequence, queries)
            mismatched = [q for q in queries if fast[q.result_index] != slow[q.result_index]]

            report['queries'] += len(queries)
            report['mismatches'] += len(mismatched)
            for query in mismatched:
                logger.error(
                    f"Trial {trial}: [{query.start_index}, {query.end_index}] "
                    f"sweep={fast[query.result_index]} brute={slow[query.result_index]}"
                )

        logger.info(f"Verified {report['queries']} queries over {trials} trials, "
                    f"{report['mismatches']} mismatches")
        return report


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description='Offline distinct-count range queries')
    parser.add_argument('--mode', choices=['solve', 'verify', 'demo'], default='solve',
                        help='Mode: answer a batch, cross-check against brute force, or run the demo')
    parser.add_argument('--input', type=str,
                        help='Input file (solve mode, defaults to stdin)')
    parser.add_argument('--output', type=str,
                        help='Output file (solve mode, defaults to stdout)')
    parser.add_argument('--config', type=str, default='config.yaml',
                        help='Path to config.yaml')
    parser.add_argument('--validate', action='store_true',
                        help='Check query bounds before solving')
    parser.add_argument('--trials', type=int,
                        help='Number of random batches (verify mode)')
    parser.add_argument('--seed', type=int,
                        help='Random seed (verify mode)')

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    pipeline = DistinctQueryPipeline(args.config)
    logging.getLogger().setLevel(pipeline.config['logging']['level'])

    if args.mode == 'solve':
        if args.input and not os.path.exists(args.input):
            parser.error(f"Input file not found: {args.input}")

        with contextlib.ExitStack() as stack:
            input_stream = stack.enter_context(open(args.input, 'rb')) if args.input else sys.stdin.buffer
            output_stream = stack.enter_context(open(args.output, 'wb')) if args.output else sys.stdout.buffer
            pipeline.run(input_stream, output_stream, validate=args.validate or None)

    elif args.mode == 'verify':
        report = pipeline.verify(trials=args.trials, seed=args.seed)
        if report['mismatches']:
            return 1

    elif args.mode == 'demo':
        print("Running Demo...")
        print("=" * 70)
        print(DEMO_INPUT.decode('ascii'))

        output = io.BytesIO()
        pipeline.run(io.BytesIO(DEMO_INPUT), output)

        print("Answers:")
        print(output.getvalue().decode('ascii'))

    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Indexed priority queue command-line interface (CLI)

This script drives :class:`IndexedMinHeap` from the shell via subcommands:
- sort:   load values into a heap and drain it in priority order
- remove: remove values by value and show what is left
- check:  verify the heap property after construction
- bench:  time the core operations for growing input sizes (CSV output)

Usage examples:
    python -m pqueue.cli sort 5 3 8 1 4
    python -m pqueue.cli sort --desc --incremental 5 3 8 1 4
    python -m pqueue.cli remove 2 2 2 7 --drop 2 --drop 9
    python -m pqueue.cli bench --base 100 --rounds 8 --output heap_bench.csv
"""

import argparse
import csv
import logging
import random
import statistics
import sys
import time

from .datastructures import IndexedMinHeap

logger = logging.getLogger("pqueue")

# Benchmark defaults
BENCH_BASE_INPUT = 100
BENCH_ROUNDS = 8
BENCH_ITERATIONS = 5
BENCH_MAX_VALUE = 1_000_000


def configure_logging(level):
    """Attach a stream handler to the package logger at ``level``."""
    logger.setLevel(level)

    if not logger.handlers:
        ch = logging.StreamHandler()
        formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(message)s')
        ch.setFormatter(formatter)
        logger.addHandler(ch)
    for handler in logger.handlers:
        handler.setLevel(level)


def _negate(x):
    return -x


def build_heap(values, bulk=True, desc=False):
    """Build a heap from ``values`` using the O(n) or the O(n log n) path."""
    key = _negate if desc else None
    if bulk:
        return IndexedMinHeap.from_sequence(values, key=key)
    return IndexedMinHeap.from_iterable(values, key=key)


def drain(heap):
    """Poll every element; returns them in priority order."""
    out = []
    while not heap.is_empty():
        out.append(heap.poll())
    return out


# -------------------------------------------------------------------
# Core command handlers
# -------------------------------------------------------------------
def cmd_sort(args):
    """Print the values in priority order."""
    heap = build_heap(args.values, bulk=args.bulk, desc=args.desc)
    print(" ".join(str(v) for v in drain(heap)))
    return 0


def cmd_remove(args):
    """Remove each --drop value once and print the remaining values."""
    heap = build_heap(args.values, bulk=args.bulk)
    for value in args.drop:
        removed = heap.remove(value)
        logger.debug("remove(%r) -> %s, size=%d", value, removed, heap.size())
        print(f"remove {value}: {'ok' if removed else 'not found'}")
    print("remaining:", " ".join(str(v) for v in drain(heap)))
    return 0


def cmd_check(args):
    """Report whether the constructed heap satisfies the heap property."""
    heap = build_heap(args.values, bulk=args.bulk, desc=args.desc)
    ok = heap.is_min_heap()
    print(f"size={heap.size()} min_heap={ok}")
    return 0 if ok else 1


# -------------------------------------------------------------------
# Benchmarks
# -------------------------------------------------------------------
def random_priorities(size, rng=random):
    """Random integer priorities in ``[0, BENCH_MAX_VALUE]``.

    Values repeat at larger sizes, which keeps the duplicate paths of the
    position index busy during ``remove`` runs.
    """
    return [rng.randint(0, BENCH_MAX_VALUE) for _ in range(size)]


def bench_add(data):
    heap = IndexedMinHeap(len(data))
    for item in data:
        heap.add(item)
    return heap


def bench_poll(data):
    heap = IndexedMinHeap.from_sequence(data)
    while not heap.is_empty():
        heap.poll()
    return heap


def bench_remove(data):
    heap = IndexedMinHeap.from_sequence(data)
    for item in data:
        heap.remove(item)
    return heap


def bench_heapify(data):
    return IndexedMinHeap.from_sequence(data)


OPERATIONS = {
    "add": bench_add,
    "poll": bench_poll,
    "remove": bench_remove,
    "heapify": bench_heapify,
}


def time_heap_operation(operation, input_size, iterations=BENCH_ITERATIONS, rng=random):
    """Time ``operation`` on fresh random input; return (mean_ms, stdev_ms).

    Input generation is excluded from the timing. A single iteration reports a
    standard deviation of 0.
    """
    samples_ms = []
    for _ in range(iterations):
        priorities = random_priorities(input_size, rng)
        started = time.perf_counter()
        operation(priorities)
        samples_ms.append((time.perf_counter() - started) * 1000)

    if len(samples_ms) == 1:
        return samples_ms[0], 0.0
    return statistics.mean(samples_ms), statistics.stdev(samples_ms)


def run_benchmarks(output_file, base_input=BENCH_BASE_INPUT, rounds=BENCH_ROUNDS,
                   iterations=BENCH_ITERATIONS, seed=None):
    """Run exponential performance tests and write the results as CSV.

    Returns the rows written (without the header).
    """
    rng = random.Random(seed)
    input_sizes = [base_input * (2 ** i) for i in range(rounds)]
    rows = []

    with open(output_file, "w", newline="") as csvfile:
        writer = csv.writer(csvfile)
        writer.writerow([
            "Input Size",
            "Operation",
            "Average Time (ms)",
            "Standard Deviation (ms)",
        ])

        for op_name, op_func in OPERATIONS.items():
            for size in input_sizes:
                avg_time, std_time = time_heap_operation(op_func, size, iterations, rng)
                row = [size, op_name, f"{avg_time:.3f}", f"{std_time:.3f}"]
                writer.writerow(row)
                rows.append(row)
                print(f"{op_name:<8} | Size: {size:<8} | Avg Time: {avg_time:.3f} ms | "
                      f"Std: {std_time:.3f} ms")

    logger.info("benchmark results written to %s", output_file)
    return rows


def cmd_bench(args):
    """Benchmark add / poll / remove / heapify."""
    run_benchmarks(args.output, base_input=args.base, rounds=args.rounds,
                   iterations=args.iterations, seed=args.seed)
    print(f"\nBenchmark completed. Results saved to {args.output}")
    return 0


# -------------------------------------------------------------------
# CLI parser setup
# -------------------------------------------------------------------
def _positive_int(text):
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {text}")
    return value


def _add_build_options(s, desc=True):
    s.add_argument("values", type=int, nargs="*")
    group = s.add_mutually_exclusive_group()
    group.add_argument("--bulk", dest="bulk", action="store_true", default=True,
                       help="Build with O(n) heapify (default)")
    group.add_argument("--incremental", dest="bulk", action="store_false",
                       help="Build with repeated add")
    if desc:
        s.add_argument("--desc", action="store_true", help="Largest value first")


def build_parser():
    """Build the argparse command-line parser with subcommands."""
    p = argparse.ArgumentParser(prog="python -m pqueue.cli", description="Indexed priority queue CLI")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    s = sub.add_parser("sort", help="Drain values in priority order")
    _add_build_options(s)
    s.set_defaults(func=cmd_sort)

    s = sub.add_parser("remove", help="Remove values by value")
    _add_build_options(s, desc=False)
    s.add_argument("--drop", type=int, action="append", default=[], required=True)
    s.set_defaults(func=cmd_remove)

    s = sub.add_parser("check", help="Verify the heap property")
    _add_build_options(s)
    s.set_defaults(func=cmd_check)

    s = sub.add_parser("bench", help="Benchmark heap operations to CSV")
    s.add_argument("--base", type=_positive_int, default=BENCH_BASE_INPUT)
    s.add_argument("--rounds", type=_positive_int, default=BENCH_ROUNDS)
    s.add_argument("--iterations", type=_positive_int, default=BENCH_ITERATIONS)
    s.add_argument("--seed", type=int, default=None)
    s.add_argument("--output", default="indexed_heap_benchmark.csv")
    s.set_defaults(func=cmd_bench)

    return p


# -------------------------------------------------------------------
# Entry point
# -------------------------------------------------------------------
def main(argv=None):
    """CLI entry point when invoked via `python -m pqueue.cli`."""
    argv = sys.argv[1:] if argv is None else argv
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(logging.DEBUG if args.debug else logging.ERROR)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())

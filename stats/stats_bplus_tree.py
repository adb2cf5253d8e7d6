"""Statistics for B+-trees."""

import argparse
import logging
import math
import os
import time
from datetime import datetime
from statistics import mean

import numpy as np
from tqdm import tqdm

from bplus_trees.bplus_tree_base import BPlusTreeBase
from bplus_trees.factory import create_bplustree
from bplus_trees.invariants import assert_tree_invariants_raise
from bplus_trees.tree_stats import bptree_stats_

logger = logging.getLogger(__name__)


def create_tree(keys, bf: int = 3) -> BPlusTreeBase:
    """Build a tree by adding each key in the given order."""
    tree = create_bplustree(bf)
    tree_add = tree.add
    for key in keys:
        tree_add(int(key))
    return tree


def random_keys(n: int, rng: np.random.Generator) -> np.ndarray:
    """Draw n unique keys from a space comfortably larger than n."""
    space = max(1 << 24, 4 * n)
    return rng.choice(space, size=n, replace=False)


def repeated_experiment(
    size: int,
    repetitions: int,
    bf: int,
    rng: np.random.Generator,
) -> None:
    """
    Repeatedly builds random B+-trees with ``size`` keys, removes a random
    half of them again and aggregates structure statistics and timings for
    both phases.
    """
    t_all_0 = time.perf_counter()

    results_full = []
    results_half = []
    times_build = []
    times_remove = []
    times_stats = []

    for _ in tqdm(range(repetitions), desc=f"n={size} bf={bf}", leave=False):
        keys = random_keys(size, rng)

        t0 = time.perf_counter()
        tree = create_tree(keys, bf)
        times_build.append(time.perf_counter() - t0)

        t0 = time.perf_counter()
        stats = bptree_stats_(tree)
        times_stats.append(time.perf_counter() - t0)
        assert_tree_invariants_raise(tree, stats)
        results_full.append(stats)

        doomed = rng.permutation(keys)[: size // 2]
        t0 = time.perf_counter()
        for key in doomed:
            tree.remove(int(key))
        times_remove.append(time.perf_counter() - t0)

        stats = bptree_stats_(tree)
        assert_tree_invariants_raise(tree, stats)
        results_half.append(stats)

    # Perfect height: ceil( log_bf(size) ) for a fully packed tree
    perfect_height = max(1, math.ceil(math.log(size, bf))) if size > 1 else 1

    rows = []
    for label, results in (("full", results_full), ("half", results_half)):
        heights = np.array([s.height for s in results], dtype=float)
        nodes = np.array([s.node_count for s in results], dtype=float)
        fill = np.array(
            [s.item_count / (s.leaf_count * (bf - 1)) for s in results], dtype=float
        )
        rows.append((f"Height ({label})", heights.mean(), heights.var()))
        rows.append((f"Node count ({label})", nodes.mean(), nodes.var()))
        rows.append((f"Leaf fill ({label})", fill.mean(), fill.var()))
    rows.append(("Perfect height", perfect_height, None))

    header = f"{'Metric':<22} {'Avg':>15} {'(Var)':>15}"
    sep_line = "-" * len(header)
    logger.info(header)
    logger.info(sep_line)
    for name, avg, var in rows:
        if var is None:
            logger.info(f"{name:<22} {avg:>15}")
        else:
            var_str = f"({var:.2f})"
            logger.info(f"{name:<22} {avg:15.2f} {var_str:>15}")

    perf_rows = [
        ("Build time (s)", times_build),
        ("Remove time (s)", times_remove),
        ("Stats time (s)", times_stats),
    ]
    header = f"{'Metric':<20}{'Avg(s)':>13}{'Total(s)':>13}"
    sep = "-" * len(header)

    logger.info("")
    logger.info("Performance summary:")
    logger.info(header)
    logger.info(sep)
    for name, times in perf_rows:
        logger.info(f"{name:<20}{mean(times):13.6f}{sum(times):13.6f}")

    logger.info(sep)
    logger.info("Execution time: %.3f seconds", time.perf_counter() - t_all_0)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run statistics experiments for B+-trees.")
    parser.add_argument(
        "--sizes", type=int, nargs="+", default=[10, 100, 1000, 10_000], help="List of tree sizes to test."
    )
    parser.add_argument(
        "--bfs", type=int, nargs="+", default=[3, 4, 16, 64], help="List of branching factors to test."
    )
    parser.add_argument("--repetitions", type=int, default=10, help="Number of repetitions for each experiment.")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility.")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="INFO",
        help="Set the logging level (default: INFO)",
    )

    args = parser.parse_args()

    rng = np.random.default_rng(args.seed)

    log_dir = os.path.join(os.getcwd(), "stats/logs/bplus_tree_logs")
    os.makedirs(log_dir, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_path = os.path.join(log_dir, f"run_{ts}.log")

    log_level = getattr(logging, args.log_level)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.FileHandler(log_path, mode="w"),
            logging.StreamHandler(),
        ],
        force=True,
    )

    # Also apply the chosen level to the library logger so that
    # log records from bplus_trees.* are emitted at the requested level.
    logging.getLogger("bplus_trees").setLevel(log_level)

    for n in args.sizes:
        for bf in args.bfs:
            logger.info("")
            logger.info(
                f"---------------- NOW RUNNING EXPERIMENT: n = {n}, bf = {bf}, "
                f"repetitions = {args.repetitions} ----------------"
            )
            t0 = time.perf_counter()
            repeated_experiment(size=n, repetitions=args.repetitions, bf=bf, rng=rng)
            logger.info(f"Total experiment time: {time.perf_counter() - t0:.3f} seconds")

"""Statistics for AVL-G trees: rotation work and height as a function of g."""

import argparse
import logging
import math
import os
import time
from datetime import datetime
from typing import Dict, List, Optional, Tuple

import numpy as np
from tqdm import tqdm

from avlg_trees.avlg_tree import AVLGTree
from avlg_trees.invariants import assert_tree_invariants_raise
from avlg_trees.logging_config import add_file_handler
from avlg_trees.tree_stats import avlg_stats_

logger = logging.getLogger(__name__)

# Distinct keys are drawn from [1, KEY_SPACE)
KEY_SPACE = 1 << 24


def random_keys(n: int, rng: np.random.Generator) -> List[int]:
    """Draw ``n`` distinct keys in random order."""
    if KEY_SPACE <= n:
        raise ValueError(f"Key-space too small! Required: {n + 1}, Available: {KEY_SPACE}")
    keys = rng.choice(KEY_SPACE - 1, size=n, replace=False) + 1
    return [int(k) for k in keys]


def random_avlg_tree(n: int, g: int, rng: np.random.Generator) -> Tuple[AVLGTree, List[int]]:
    """Build an AVL-g tree from ``n`` random distinct keys; returns the tree and its keys."""
    tree = AVLGTree(g)
    keys = random_keys(n, rng)
    tree_insert = tree.insert
    for key in keys:
        tree_insert(key)
    return tree, keys


def perfect_height(size: int) -> int:
    """Height of a perfectly balanced binary tree holding ``size`` keys."""
    return math.ceil(math.log2(size + 1)) - 1 if size > 0 else -1


def repeated_experiment(
    size: int,
    repetitions: int,
    g: int,
    delete_fraction: float = 0.5,
    rng: Optional[np.random.Generator] = None,
) -> Dict[str, Tuple[float, float]]:
    """
    Repeatedly builds random AVL-g trees with ``size`` keys, then deletes a random
    ``delete_fraction`` of them. Every resulting tree is audited. Returns a mapping
    from metric name to ``(mean, variance)`` and logs it as a table.
    """
    if rng is None:
        rng = np.random.default_rng()
    if not 0.0 <= delete_fraction <= 1.0:
        raise ValueError(f"delete_fraction must be within [0, 1], got {delete_fraction}")

    insert_rotations = []
    delete_rotations = []
    heights = []
    height_amps = []
    times_build = []
    times_delete = []

    perfect = perfect_height(size)
    n_delete = int(size * delete_fraction)

    for _ in tqdm(range(repetitions), desc=f"g={g}", unit="tree", leave=False):
        t0 = time.perf_counter()
        tree, keys = random_avlg_tree(size, g, rng)
        times_build.append(time.perf_counter() - t0)

        build_rotations = tree.rotation_count
        insert_rotations.append(build_rotations / size if size else 0.0)
        heights.append(tree.height())
        height_amps.append(tree.height() / perfect if perfect > 0 else 0.0)

        victims = rng.permutation(len(keys))[:n_delete]
        t0 = time.perf_counter()
        for idx in victims:
            tree.delete(keys[idx])
        times_delete.append(time.perf_counter() - t0)
        delete_rotations.append(
            (tree.rotation_count - build_rotations) / n_delete if n_delete else 0.0
        )

        stats = avlg_stats_(tree)
        assert_tree_invariants_raise(tree, stats)

    rows = {
        "Rotations/insert": insert_rotations,
        "Rotations/delete": delete_rotations,
        "Height": heights,
        "Height amplification": height_amps,
        "Build time (s)": times_build,
        "Delete time (s)": times_delete,
    }
    summary = {name: (float(np.mean(vals)), float(np.var(vals))) for name, vals in rows.items()}

    header = f"{'Metric':<22} {'Avg':>15} {'(Var)':>15}"
    sep_line = "-" * len(header)
    logger.info(header)
    logger.info(sep_line)
    for name, (avg, var) in summary.items():
        var_str = f"({var:.4f})"
        logger.info(f"{name:<22} {avg:15.4f} {var_str:>15}")
    logger.info(f"{'Perfect height':<22} {perfect:>15}")
    logger.info(sep_line)

    return summary


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run statistics experiments for AVL-G trees.")
    parser.add_argument(
        "--sizes", type=int, nargs="+", default=[100, 1000, 10_000], help="List of tree sizes to test."
    )
    parser.add_argument(
        "--g", dest="gs", type=int, action="append", default=None,
        help="Balance parameter to test; repeat the flag for several values (default: 1 2 3 5 8).",
    )
    parser.add_argument("--repetitions", type=int, default=5, help="Number of repetitions for each experiment.")
    parser.add_argument(
        "--delete-fraction", type=float, default=0.5, help="Fraction of keys deleted after each build."
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility.")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="INFO",
        help="Set the logging level (default: INFO)",
    )

    args = parser.parse_args()
    rng = np.random.default_rng(args.seed)

    log_dir = os.path.join(os.getcwd(), "stats/logs/avlg_tree_logs")
    os.makedirs(log_dir, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_path = os.path.join(log_dir, f"run_{ts}.log")

    log_level = getattr(logging, args.log_level)
    # One run log for both the script and the avlg_trees logger
    run_log = add_file_handler(log_path, level=log_level)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[run_log, logging.StreamHandler()],
        force=True,
    )

    gs = args.gs or [1, 2, 3, 5, 8]
    for n in args.sizes:
        for g in gs:
            logger.info("")
            logger.info(
                f"---------------- NOW RUNNING EXPERIMENT: n = {n}, g = {g}, repetitions = {args.repetitions} ----------------"
            )
            t0 = time.perf_counter()
            repeated_experiment(
                size=n,
                repetitions=args.repetitions,
                g=g,
                delete_fraction=args.delete_fraction,
                rng=rng,
            )
            elapsed = time.perf_counter() - t0
            logger.info(f"Total experiment time: {elapsed:.3f} seconds")

#!/usr/bin/env python3
"""Benchmark suite for the pyskip SkipList, optionally against SortedDict."""

import argparse
import json
import random
import time
from pathlib import Path
from typing import Dict, List, Optional

import numpy as np
import plotly.graph_objects as go
try:
    from sortedcontainers import SortedDict
    HAS_SORTEDCONTAINERS = True
except ImportError:
    HAS_SORTEDCONTAINERS = False
    print("sortedcontainers not available, skipping SortedDict benchmarks")
from tqdm import tqdm

from pyskip import SkipList

class Metrics:
    def __init__(self):
        self.insert_latencies: List[float] = []
        self.search_latencies: List[float] = []
        self.delete_latencies: List[float] = []
        self.max_level: int = 0

    @staticmethod
    def _percentiles(latencies: List[float]) -> Dict[str, float]:
        return {
            "p50": float(np.percentile(latencies, 50)),
            "p95": float(np.percentile(latencies, 95)),
            "p99": float(np.percentile(latencies, 99)),
        }

    def to_dict(self) -> Dict:
        return {
            "insert_latencies": self._percentiles(self.insert_latencies),
            "search_latencies": self._percentiles(self.search_latencies),
            "delete_latencies": self._percentiles(self.delete_latencies),
            "insert_avg": float(np.mean(self.insert_latencies)),
            "max_level": self.max_level,
        }

    def plot_latencies(self, title: str, output_path: Path):
        fig = go.Figure()

        for name, latencies in (
            ("Insert Latency", self.insert_latencies),
            ("Search Latency", self.search_latencies),
            ("Delete Latency", self.delete_latencies),
        ):
            fig.add_trace(go.Box(
                y=latencies,
                name=name,
                boxpoints="outliers"
            ))

        fig.update_layout(
            title=title,
            yaxis_title="Latency (µs)",
            boxmode="group"
        )

        fig.write_html(output_path)

class BenchmarkSuite:
    def __init__(self, num_entries: int, seed: Optional[int]):
        self.num_entries = num_entries
        self.seed = seed
        rng = random.Random(seed)
        self._keys = [str(i) for i in range(num_entries)]
        rng.shuffle(self._keys)
        self._lookup = list(self._keys)
        rng.shuffle(self._lookup)

    def run_skiplist_benchmark(self) -> Metrics:
        metrics = Metrics()
        skip = SkipList(seed=self.seed)

        for key in tqdm(self._keys, desc="SkipList Insert"):
            start = time.perf_counter()
            skip.insert(key, key)
            metrics.insert_latencies.append((time.perf_counter() - start) * 1e6)
        metrics.max_level = skip.level

        for key in tqdm(self._lookup, desc="SkipList Search"):
            start = time.perf_counter()
            skip.search(key)
            metrics.search_latencies.append((time.perf_counter() - start) * 1e6)

        for key in tqdm(self._lookup, desc="SkipList Delete"):
            start = time.perf_counter()
            skip.delete(key)
            metrics.delete_latencies.append((time.perf_counter() - start) * 1e6)

        assert skip.is_empty()
        return metrics

    def run_sorteddict_benchmark(self) -> Metrics:
        metrics = Metrics()
        sd = SortedDict()

        for key in tqdm(self._keys, desc="SortedDict Insert"):
            start = time.perf_counter()
            sd[key] = key
            metrics.insert_latencies.append((time.perf_counter() - start) * 1e6)

        for key in tqdm(self._lookup, desc="SortedDict Search"):
            start = time.perf_counter()
            sd[key]
            metrics.search_latencies.append((time.perf_counter() - start) * 1e6)

        for key in tqdm(self._lookup, desc="SortedDict Delete"):
            start = time.perf_counter()
            del sd[key]
            metrics.delete_latencies.append((time.perf_counter() - start) * 1e6)

        return metrics

def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--size", type=int, default=100000, help="Number of entries")
    parser.add_argument("--seed", type=int, default=None, help="Seed for key order and node heights")
    parser.add_argument("--output", type=Path, default=Path("benchmark_results"), help="Output directory")
    args = parser.parse_args()

    args.output.mkdir(parents=True, exist_ok=True)

    suite = BenchmarkSuite(args.size, args.seed)

    skiplist_metrics = suite.run_skiplist_benchmark()

    # SortedDict (if available)
    sorteddict_metrics = suite.run_sorteddict_benchmark() if HAS_SORTEDCONTAINERS else None

    # Generate reports
    skiplist_metrics.plot_latencies(
        "SkipList Latency Distribution",
        args.output / "skiplist_latencies.html"
    )

    # Save metrics
    with open(args.output / "metrics.json", "w") as f:
        json.dump({
            "skiplist": skiplist_metrics.to_dict(),
            "sorteddict": sorteddict_metrics.to_dict() if sorteddict_metrics else None,
        }, f, indent=2)

if __name__ == "__main__":
    main()

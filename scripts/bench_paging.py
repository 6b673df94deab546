#!/usr/bin/env python3
"""Benchmark paged listing: latency (p50, p95, p99) and QPS.

Usage:
    export API_URL=http://localhost:8000
    uv run python scripts/bench_paging.py --repository articles [--num-docs 500] [--num-queries 100]
"""
from __future__ import annotations

import argparse
import os
import random
import statistics
import sys
import time

import httpx


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark paged listing")
    parser.add_argument("--repository", required=True, help="Repository to seed and page through")
    parser.add_argument("--num-docs", type=int, default=200, help="Documents to add before paging")
    parser.add_argument("--num-queries", type=int, default=50, help="Number of page requests")
    parser.add_argument("--page-size", type=int, default=20, help="Documents per page")
    parser.add_argument("--output", type=str, default="/results/bench_paging.txt", help="Output file path")
    args = parser.parse_args()

    api_url = os.environ.get("API_URL", "http://localhost:8000").rstrip("/")
    documents_url = f"{api_url}/v1/repositories/{args.repository}/documents"

    with httpx.Client(timeout=60.0) as client:
        print(f"Seeding {args.num_docs} documents...")
        for i in range(args.num_docs):
            client.post(
                documents_url,
                json={"title": f"Benchmark document {i}", "rank": random.randint(0, 1000)},
            ).raise_for_status()

    page_count = max(1, -(-args.num_docs // args.page_size))
    latencies: list[float] = []
    errors = 0
    print(f"Running {args.num_queries} page requests...")
    start_total = time.perf_counter()
    with httpx.Client(timeout=30.0) as client:
        for _ in range(args.num_queries):
            t0 = time.perf_counter()
            r = client.get(
                documents_url,
                params={
                    "page": random.randint(1, page_count),
                    "size": args.page_size,
                    "sort": "rank:desc",
                },
            )
            elapsed = time.perf_counter() - t0
            if r.status_code == 200:
                latencies.append(elapsed)
            else:
                errors += 1
    total_elapsed = time.perf_counter() - start_total

    n = len(latencies)
    if n == 0:
        print("No successful page requests.")
        return 1

    qps = n / total_elapsed
    p50 = statistics.median(latencies) * 1000
    p95 = sorted(latencies)[int(n * 0.95) - 1] * 1000 if n >= 20 else p50
    p99 = sorted(latencies)[int(n * 0.99) - 1] * 1000 if n >= 100 else p95

    summary = (
        f"Paging benchmark (repository={args.repository}, size={args.num_docs}, "
        f"queries={n}, errors={errors})\n"
        f"  QPS: {qps:.2f}\n"
        f"  Latency: p50={p50:.1f} ms, p95={p95:.1f} ms, p99={p99:.1f} ms\n"
        f"  Total time: {total_elapsed:.2f} s\n"
    )
    print(summary)

    try:
        os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(summary)
        print(f"Wrote {args.output}")
    except OSError as e:
        print(f"Could not write {args.output}: {e}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())

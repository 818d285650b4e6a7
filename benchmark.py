#!/usr/bin/env python3
"""
Performance benchmark for the sanitizer.
Sanitizes a repeated mixed-content fragment and reports throughput per policy.
"""

from __future__ import annotations

import argparse
import time

from sanehtml import DEFAULT_POLICY, STRICT_POLICY, Policy, sanitize, strip_tags

FRAGMENT = (
    '<p>Hello <b>world</b> <script>bad()</script> <a href="http://x.com" onclick="y()">link</a>'
    ' see https://example.com/docs.</p>'
)


def bench(name: str, func, iterations: int) -> float:
    start = time.perf_counter()
    for _ in range(iterations):
        func()
    elapsed = time.perf_counter() - start
    per_call = elapsed / iterations * 1000
    print(f"{name:<24} {iterations:>6} runs  {elapsed:8.3f}s total  {per_call:8.3f}ms/run")
    return elapsed


def main() -> None:
    parser = argparse.ArgumentParser(description="Benchmark sanitize() and strip_tags()")
    parser.add_argument("--iterations", "-n", type=int, default=200, help="Runs per case (default: 200)")
    parser.add_argument("--repeat", "-r", type=int, default=100, help="Copies of the fragment per input (default: 100)")
    args = parser.parse_args()

    html = FRAGMENT * args.repeat
    linkify_policy = Policy(
        allowed_tags=DEFAULT_POLICY.allowed_tags,
        allowed_attributes=DEFAULT_POLICY.allowed_attributes,
        allowed_schemes=DEFAULT_POLICY.allowed_schemes,
        linkify=True,
    )

    print(f"Input: {len(html)} chars")
    print("=" * 70)
    bench("sanitize (default)", lambda: sanitize(html, DEFAULT_POLICY), args.iterations)
    bench("sanitize (strict)", lambda: sanitize(html, STRICT_POLICY), args.iterations)
    bench("sanitize (linkify)", lambda: sanitize(html, linkify_policy), args.iterations)
    bench("strip_tags", lambda: strip_tags(html), args.iterations)


if __name__ == "__main__":
    main()

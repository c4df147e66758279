"""
scripts/benchmark.py
────────────────────────────────────────────────────────────────────────
Rough latency check against a running server.  Signs up a throw-away
user, then times the main endpoints:

    python -m scripts.benchmark --base http://127.0.0.1:8000
"""
from __future__ import annotations

import statistics
import time
from argparse import ArgumentParser
from dataclasses import dataclass
from typing import Callable

import httpx

DAY = "2024-01-15"


@dataclass
class Result:
    operation: str
    avg_ms: float
    min_ms: float
    max_ms: float
    requests: int


def bench(name: str, fn: Callable[[], httpx.Response], iterations: int = 10) -> Result:
    times: list[float] = []
    print(f"\nBenchmarking: {name}", end=" ", flush=True)
    for _ in range(iterations):
        start = time.perf_counter()
        fn()
        times.append((time.perf_counter() - start) * 1000)
        print(".", end="", flush=True)
    print(" done")
    return Result(name, round(statistics.mean(times)), min(times), max(times), iterations)


def run(base: str) -> list[Result]:
    with httpx.Client(base_url=f"{base.rstrip('/')}/api/v1", timeout=30) as c:
        email = f"bench{int(time.time())}@benchmark.com"
        r = c.post("/auth/signup", json={"email": email, "password": "password123"})
        r.raise_for_status()
        c.headers["Authorization"] = f"Bearer {r.json()['user']['token']}"

        onboarding = {
            "age": 25, "gender": "male", "weightLbs": 180, "heightInches": 70,
            "activityLevel": "moderate",
            "proteinPercentage": 30, "carbsPercentage": 40, "fatPercentage": 30,
        }
        results = [
            bench("Auth - token verification", lambda: c.get("/auth/verify"), 20),
            bench("Profile - onboarding", lambda: c.post("/profile/onboarding", json=onboarding)),
            bench("Meals - create meal",
                  lambda: c.post("/meals", json={"name": "Benchmark Meal", "date": DAY}), 15),
            bench("Meals - fetch daily meals", lambda: c.get("/meals", params={"date": DAY}), 20),
            bench("Meals - daily summary", lambda: c.get("/meals/summary", params={"date": DAY}), 20),
            bench("Foods - USDA search", lambda: c.get("/foods/search", params={"q": "chicken"})),
        ]

        meals = c.get("/meals", params={"date": DAY}).json()["meals"]
        if meals:
            food = {"foodId": 123456, "foodName": "Benchmark Food",
                    "calories": 200, "protein": 20, "carbs": 30, "fat": 5}
            mid = meals[0]["id"]
            results.append(
                bench("Meals - add food", lambda: c.post(f"/meals/{mid}/foods", json=food), 15)
            )
    return results


def report(results: list[Result]) -> None:
    print("\n" + "=" * 60)
    print(f"{'Operation':<35}{'Avg':>8}{'Min':>8}{'Max':>8}")
    print("-" * 60)
    for r in results:
        print(f"{r.operation:<35}{r.avg_ms:>6.0f}ms{r.min_ms:>6.0f}ms{r.max_ms:>6.0f}ms")
    fastest = min(results, key=lambda r: r.avg_ms)
    slowest = max(results, key=lambda r: r.avg_ms)
    print(f"\nAverage response time: {statistics.mean(r.avg_ms for r in results):.0f}ms")
    print(f"Fastest: {fastest.operation}   Slowest: {slowest.operation}")


if __name__ == "__main__":  # pragma: no cover
    ap = ArgumentParser()
    ap.add_argument("--base", default="http://127.0.0.1:8000")
    report(run(ap.parse_args().base))

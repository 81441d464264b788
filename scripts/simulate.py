"""
Chaos Simulation Script

Fires bursts of optimistic cart updates at a SessionStore backed by a
flaky API and reports how often rollbacks happened and whether the local
cart converged with the server's.

Targets:
    - mock: in-process MockApiClient (no server needed)
    - http: HttpApiClient against a running dev backend
            (python -m foodingo.devserver)

Run from project root: python scripts/simulate.py --target mock --ops 200

Version: 1.0.0
"""

import argparse
import asyncio
import random
import time
from datetime import datetime
from typing import Any

from foodingo.core.config import get_settings, setup_logging
from foodingo.services.api import HttpApiClient, MockApiClient
from foodingo.services.api.catalog import DEMO_PRODUCTS
from foodingo.services.notifications import MockNotifier
from foodingo.services.storage import TOKEN_KEY, MemoryStorage
from foodingo.store import SessionStore, describe_cart

SIM_TOKEN = "chaos-simulation-token"


def build_store(target: str, failure_rate: float, base_url: str) -> SessionStore:
    storage = MemoryStorage({TOKEN_KEY: SIM_TOKEN})
    if target == "http":
        api = HttpApiClient(storage=storage, base_url=base_url)
    else:
        api = MockApiClient(failure_rate=failure_rate, min_latency=0.01, max_latency=0.15)
    return SessionStore(api=api, storage=storage, notifier=MockNotifier())


async def seed_cart(store: SessionStore, products: list[str]) -> None:
    """Put every product in the cart a few times over, with retries."""
    for product_id in products:
        for _ in range(5):
            if await store.add_to_cart(product_id, quantity=3):
                break
    await store.drain()


async def fire_burst(store: SessionStore, products: list[str], size: int) -> list[dict[str, Any]]:
    """Schedule a burst of random increments/decrements and wait for all of them."""
    scheduled = []
    for _ in range(size):
        product_id = random.choice(products)
        start = time.time()
        if random.random() < 0.6:
            op, task = "increase", store.increase_quantity(product_id)
        else:
            op, task = "decrease", store.decrease_quantity(product_id)
        scheduled.append((op, product_id, start, task))

    results = []
    for op, product_id, start, task in scheduled:
        ok = await task
        results.append({
            "op": op,
            "product": product_id,
            "success": ok,
            "time": round(time.time() - start, 3),
        })
    return results


async def run_simulation(
    target: str = "mock",
    num_ops: int = 200,
    burst: int = 10,
    failure_rate: float = 0.2,
    base_url: str = "",
) -> dict[str, Any]:
    """
    Run the chaos simulation.

    Args:
        target: "mock" or "http"
        num_ops: Total number of quantity changes
        burst: Changes fired concurrently per burst
        failure_rate: Simulated failure probability (mock target only)
        base_url: Dev backend base URL (http target only)
    """
    print("=" * 70)
    print("CHAOS SIMULATION - OPTIMISTIC CART UPDATES")
    print("=" * 70)
    print(f"Target: {target} {base_url if target == 'http' else ''}")
    print(f"Operations: {num_ops} (bursts of {burst})")
    if target == "mock":
        print(f"Failure rate: {failure_rate:.0%}")
    print(f"Started: {datetime.now().strftime('%H:%M:%S')}")
    print("=" * 70)

    store = build_store(target, failure_rate, base_url)
    products = [p["_id"] for p in DEMO_PRODUCTS]
    start_time = time.time()

    try:
        await seed_cart(store, products)
        print(f"\nSeeded cart: {store.cart_count} items in {len(store.cart_lines)} lines")

        results = []
        remaining = num_ops
        while remaining > 0:
            size = min(burst, remaining)
            results.extend(await fire_burst(store, products, size))
            remaining -= size
        await store.drain()

        local_after_ops = {line.product_id: line.quantity for line in store.cart_lines}
        refreshed = await store.get_cart_data()
        server = {line.product_id: line.quantity for line in store.cart_lines}
    finally:
        await store.api.aclose()

    total_time = round(time.time() - start_time, 2)

    accepted = [r for r in results if r["success"]]
    rolled_back = [r for r in results if not r["success"]]
    notifications = store.notifier.errors
    converged = refreshed and local_after_ops == server

    print("\n" + "=" * 70)
    print("SIMULATION RESULTS")
    print("=" * 70)
    print(f"\nAccepted: {len(accepted)}/{len(results)}")
    print(f"Rolled back (resynced): {len(rolled_back)}/{len(results)}")
    print(f"Error notifications: {len(notifications)}")
    print(f"Total Time: {total_time}s")

    if accepted:
        avg_time = round(sum(r["time"] for r in accepted) / len(accepted), 3)
        print(f"\nAverage persist latency: {avg_time}s")

    print(f"\nLocal cart matches server after settling: {'yes' if converged else 'no'}")
    if not converged:
        print(f"   local:  {local_after_ops}")
        print(f"   server: {server}")

    print("\nFinal cart:")
    for line in describe_cart(store):
        print(f"   {line['product']}: x{line['quantity']} = {get_settings().format_amount(line['line_total'])}")
    print("=" * 70)

    return {
        "total": len(results),
        "accepted": len(accepted),
        "rolled_back": len(rolled_back),
        "converged": converged,
        "total_time": total_time,
    }


def parse_args() -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Chaos simulation for optimistic cart updates")
    parser.add_argument("--target", choices=["mock", "http"], default="mock")
    parser.add_argument("--ops", type=int, default=200, help="Number of quantity changes")
    parser.add_argument("--burst", type=int, default=10, help="Concurrent changes per burst")
    parser.add_argument("--failure-rate", type=float, default=0.2, help="Mock failure probability")
    parser.add_argument(
        "--base-url",
        default=f"http://{settings.devserver_host}:{settings.devserver_port}/api",
        help="Dev backend URL for --target http",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()
    setup_logging()
    if args.seed is not None:
        random.seed(args.seed)
    asyncio.run(run_simulation(
        target=args.target,
        num_ops=args.ops,
        burst=args.burst,
        failure_rate=args.failure_rate,
        base_url=args.base_url,
    ))

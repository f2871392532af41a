"""
Concurrency Simulation Script

Fires concurrent requests at the utility API to check response times and
order-number collisions under load.
Run from project root (with the API running): python scripts/simulate.py

Author: Mesob Platform Team
Version: 1.0.0
"""

import argparse
import asyncio
import random
import sys
import time
from collections import Counter
from datetime import datetime
from typing import Any

import httpx

# Configuration
API_BASE_URL = "http://localhost:8001"
TOTAL_REQUESTS = 200

# Restaurant hubs (lat, lng) used as delivery origins
RESTAURANTS = [
    (40.7128, -74.0060),  # Lower Manhattan
    (40.7580, -73.9855),  # Midtown
    (40.6782, -73.9442),  # Brooklyn
    (40.7282, -73.7949),  # Queens
]


def generate_delivery_payload() -> dict[str, Any]:
    """Random restaurant plus a customer within roughly 8 km."""
    lat, lng = random.choice(RESTAURANTS)
    return {
        "origin_lat": lat,
        "origin_lng": lng,
        "dest_lat": round(lat + random.uniform(-0.07, 0.07), 6),
        "dest_lng": round(lng + random.uniform(-0.07, 0.07), 6),
        "preparation_minutes": random.choice([None, 10, 15, 20, 30]),
    }


# =============================================================================
# REQUESTS
# =============================================================================

async def request_order_number(
    client: httpx.AsyncClient,
    request_num: int
) -> dict[str, Any]:
    """Ask the API for a new order number."""
    start_time = time.time()

    try:
        response = await client.post(
            f"{API_BASE_URL}/api/utils/order-number",
            timeout=30.0
        )
        elapsed = round(time.time() - start_time, 3)

        if response.status_code == 200:
            return {
                "request_num": request_num,
                "success": True,
                "order_number": response.json().get("order_number"),
                "time": elapsed,
                "mode": "order-number"
            }
        return {
            "request_num": request_num,
            "success": False,
            "error": response.text[:100],
            "time": elapsed,
            "mode": "order-number"
        }
    except httpx.HTTPError as e:
        elapsed = round(time.time() - start_time, 3)
        return {
            "request_num": request_num,
            "success": False,
            "error": str(e)[:100],
            "time": elapsed,
            "mode": "order-number"
        }


async def request_delivery_estimate(
    client: httpx.AsyncClient,
    request_num: int
) -> dict[str, Any]:
    """Ask the API for a delivery estimate between random points."""
    payload = generate_delivery_payload()
    start_time = time.time()

    try:
        response = await client.post(
            f"{API_BASE_URL}/api/utils/delivery-estimate",
            json=payload,
            timeout=30.0
        )
        elapsed = round(time.time() - start_time, 3)

        if response.status_code == 200:
            data = response.json()
            return {
                "request_num": request_num,
                "success": True,
                "total_minutes": data.get("total_minutes"),
                "distance": data.get("formatted_distance"),
                "time": elapsed,
                "mode": "estimate"
            }
        return {
            "request_num": request_num,
            "success": False,
            "error": response.text[:100],
            "time": elapsed,
            "mode": "estimate"
        }
    except httpx.HTTPError as e:
        elapsed = round(time.time() - start_time, 3)
        return {
            "request_num": request_num,
            "success": False,
            "error": str(e)[:100],
            "time": elapsed,
            "mode": "estimate"
        }


# =============================================================================
# MAIN SIMULATION RUNNER
# =============================================================================

async def run_simulation(
    mode: str = "both",
    num_requests: int = TOTAL_REQUESTS
) -> dict[str, Any]:
    """
    Run the concurrency simulation.

    Args:
        mode: "order-number", "estimate", or "both"
        num_requests: Number of requests to fire
    """
    print("=" * 70)
    print("🔥 CONCURRENCY SIMULATION")
    print("=" * 70)
    print(f"📋 Total Requests: {num_requests}")
    print(f"🎯 Target: {API_BASE_URL}")
    print(f"🔧 Mode: {mode}")
    print(f"⏰ Started: {datetime.now().strftime('%H:%M:%S')}")
    print("=" * 70)

    start_time = time.time()

    async with httpx.AsyncClient() as client:
        tasks = []
        for i in range(num_requests):
            if mode == "order-number" or (mode == "both" and i % 2 == 0):
                tasks.append(request_order_number(client, i + 1))
            else:
                tasks.append(request_delivery_estimate(client, i + 1))
        results = await asyncio.gather(*tasks)

    total_time = round(time.time() - start_time, 2)

    successful = [r for r in results if r["success"]]
    failed = [r for r in results if not r["success"]]

    print("\n" + "=" * 70)
    print("📊 SIMULATION RESULTS")
    print("=" * 70)
    print(f"\n✅ Successful: {len(successful)}/{num_requests}")
    print(f"❌ Failed: {len(failed)}/{num_requests}")
    print(f"⏱️  Total Time: {total_time}s")

    if successful:
        avg_time = round(sum(r["time"] for r in successful) / len(successful), 3)
        print(f"\n📈 Performance Metrics:")
        print(f"   Average Response: {avg_time}s")
        print(f"   Fastest: {min(r['time'] for r in successful)}s")
        print(f"   Slowest: {max(r['time'] for r in successful)}s")

    numbers = [r["order_number"] for r in successful if r["mode"] == "order-number"]
    duplicates = {n: c for n, c in Counter(numbers).items() if c > 1}
    if numbers:
        print(f"\n🔢 Order Numbers: {len(numbers)} issued, {len(duplicates)} duplicated")
        for number, count in list(duplicates.items())[:5]:
            print(f"   {number} x{count}")

    if failed:
        print(f"\n⚠️  Failed Request Details (showing first 5):")
        for f in failed[:5]:
            print(f"   #{f['request_num']} [{f['mode']}]: {f.get('error', 'Unknown error')}")

    print("\n" + "=" * 70)

    return {
        "total": num_requests,
        "successful": len(successful),
        "failed": len(failed),
        "duplicates": len(duplicates),
        "total_time": total_time,
    }


async def check_health() -> bool:
    """Make sure the API is up before firing requests."""
    async with httpx.AsyncClient() as client:
        try:
            response = await client.get(f"{API_BASE_URL}/health", timeout=5.0)
        except httpx.HTTPError as e:
            print(f"   ❌ API unreachable: {e}")
            return False

    if response.status_code != 200:
        print(f"   ❌ Failed: {response.text}")
        return False

    print(f"   ✅ Status: {response.json().get('status')}")
    return True


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Concurrency Simulation Script")
    parser.add_argument("--order-numbers", action="store_true", help="Order-number requests only")
    parser.add_argument("--estimates", action="store_true", help="Delivery-estimate requests only")
    parser.add_argument("--requests", type=int, default=TOTAL_REQUESTS, help="Number of requests")
    args = parser.parse_args()

    if args.order_numbers:
        mode = "order-number"
    elif args.estimates:
        mode = "estimate"
    else:
        mode = "both"

    print("\n1️⃣ Health Check...")
    if not asyncio.run(check_health()):
        sys.exit(1)

    asyncio.run(run_simulation(mode=mode, num_requests=args.requests))

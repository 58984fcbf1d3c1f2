"""
Rush Hour Simulation Script

Fires concurrent orders at the API and walks them through the kitchen
flow up to payment, to exercise the stores and the sales sheet export.
Run from project root: python scripts/simulate.py
"""

import argparse
import asyncio
import os
import random
import sys
import time
from datetime import datetime
from typing import Any

import httpx

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
# Windows event loop fix
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

API_BASE_URL = "http://localhost:8001"
TOTAL_ORDERS = 50
STATUS_FLOW = ["preparing", "ready", "delivered", "paid"]

CUSTOMERS = [
    "Mesa 1", "Mesa 2", "Mesa 3", "Mesa 4", "Mesa 5",
    "Balcão", "João", "Maria", "Carlos", "Ana",
]
OBSERVATIONS = [None, None, "Sem cebola", "Bem passado", "Pouco sal"]


def build_line(item: dict[str, Any]) -> dict[str, Any]:
    """One order line for a menu item, customized when it is a dish."""
    price = item["price"]
    details: list[str] = []
    is_marmitex = False

    if item["category"] == "pratos" and (item["sides"] or item["extras"]):
        is_marmitex = random.random() < 0.3
        if is_marmitex:
            details.append("📦 MARMITEX")
        removed = [side for side in item["sides"] if random.random() < 0.2]
        if not removed:
            details.append("Completa")
        elif len(removed) == len(item["sides"]):
            details.append("Sem acompanhamentos")
        else:
            details.append("S/ " + ", ".join(removed))
        for extra in item["extras"]:
            if random.random() < 0.15:
                price += extra["price"]
                details.append("+ " + extra["name"])

    return {
        "name": item["name"],
        "price": round(price, 2),
        "details": details,
        "observation": random.choice(OBSERVATIONS),
        "isMarmitex": is_marmitex,
        "quantity": random.randint(1, 3),
    }


def generate_order_payload(menu: list[dict[str, Any]]) -> dict[str, Any]:
    picks = random.sample(menu, k=min(len(menu), random.randint(1, 4)))
    return {
        "customer": random.choice(CUSTOMERS),
        "items": [build_line(item) for item in picks],
    }


async def fetch_menu(client: httpx.AsyncClient) -> list[dict[str, Any]]:
    response = await client.get(f"{API_BASE_URL}/api/menu")
    response.raise_for_status()
    return response.json()


async def run_order(
    client: httpx.AsyncClient,
    menu: list[dict[str, Any]],
    order_num: int,
    pay: bool,
) -> dict[str, Any]:
    """Create one order and advance it; paid orders land on the sales sheet."""
    start_time = time.time()

    try:
        response = await client.post(
            f"{API_BASE_URL}/api/orders",
            json=generate_order_payload(menu),
            timeout=30.0,
        )
        if response.status_code != 201:
            return {
                "order_num": order_num,
                "success": False,
                "error": response.text[:100],
                "time": round(time.time() - start_time, 3),
            }

        order = response.json()
        steps = STATUS_FLOW if pay else STATUS_FLOW[:random.randint(0, 3)]
        for status in steps:
            update = await client.put(
                f"{API_BASE_URL}/api/orders/{order['id']}",
                json={"status": status},
                timeout=30.0,
            )
            update.raise_for_status()

        return {
            "order_num": order_num,
            "success": True,
            "order_id": order["id"],
            "total": order["total"],
            "paid": pay,
            "time": round(time.time() - start_time, 3),
        }
    except httpx.HTTPError as e:
        return {
            "order_num": order_num,
            "success": False,
            "error": str(e)[:100],
            "time": round(time.time() - start_time, 3),
        }


async def run_simulation(num_orders: int = TOTAL_ORDERS, paid_ratio: float = 0.7) -> dict[str, Any]:
    """
    Run the rush hour simulation.

    Args:
        num_orders: Number of orders to create
        paid_ratio: Share of orders taken all the way to paid
    """
    print("=" * 70)
    print("🔥 RUSH HOUR SIMULATION")
    print("=" * 70)
    print(f"📋 Total Orders: {num_orders}")
    print(f"🎯 Target: {API_BASE_URL}")
    print(f"⏰ Started: {datetime.now().strftime('%H:%M:%S')}")
    print("=" * 70)

    start_time = time.time()

    async with httpx.AsyncClient() as client:
        menu = await fetch_menu(client)
        if not menu:
            print("\n❌ Menu is empty. Seed it first: python -m comanda.seed")
            return {"total": num_orders, "successful": 0, "failed": num_orders}

        tasks = [
            run_order(client, menu, i + 1, random.random() < paid_ratio)
            for i in range(num_orders)
        ]
        results = await asyncio.gather(*tasks)

        report = await client.get(f"{API_BASE_URL}/api/reports/daily")

    total_time = round(time.time() - start_time, 2)
    successful = [r for r in results if r["success"]]
    failed = [r for r in results if not r["success"]]
    paid = [r for r in successful if r["paid"]]

    print("\n" + "=" * 70)
    print("📊 SIMULATION RESULTS")
    print("=" * 70)
    print(f"\n✅ Successful Orders: {len(successful)}/{num_orders}")
    print(f"💳 Paid Orders: {len(paid)}")
    print(f"❌ Failed Orders: {len(failed)}/{num_orders}")
    print(f"⏱️  Total Time: {total_time}s")

    if successful:
        avg_time = round(sum(r["time"] for r in successful) / len(successful), 3)
        print("\n📈 Performance Metrics:")
        print(f"   Average Flow: {avg_time}s")
        print(f"   Fastest: {min(r['time'] for r in successful)}s")
        print(f"   Slowest: {max(r['time'] for r in successful)}s")
        print(f"   💰 Paid Revenue: R$ {sum(r['total'] for r in paid):.2f}")

    if report.status_code == 200:
        data = report.json()
        print("\n🧾 Daily report:")
        print(f"   Revenue: R$ {data.get('revenue')}")
        print(f"   Average ticket: R$ {data.get('avgTicket')}")
        print(f"   Peak hour: {data.get('peakHour')}")

    if failed:
        print("\n⚠️  Failed Order Details (showing first 5):")
        for f in failed[:5]:
            print(f"   Order #{f['order_num']}: {f.get('error', 'Unknown error')}")

    print("\n" + "=" * 70)
    print("🔍 VERIFICATION STEPS")
    print("=" * 70)
    print("1. Check Celery terminal - export tasks should complete")
    print("2. Run: python scripts/verify.py")
    print(f"3. Visit {API_BASE_URL}/api/kitchen and /api/cashier")
    print("=" * 70)

    return {
        "total": num_orders,
        "successful": len(successful),
        "failed": len(failed),
        "total_time": total_time,
        "results": results,
    }


async def check_health() -> bool:
    async with httpx.AsyncClient() as client:
        try:
            response = await client.get(f"{API_BASE_URL}/health")
        except httpx.HTTPError as e:
            print(f"❌ API unreachable: {e}")
            return False
    if response.status_code != 200:
        print(f"❌ Health check failed: {response.text}")
        return False
    data = response.json()
    print(f"✅ Status: {data.get('status')} | Storage: {data.get('storage')} | Redis: {data.get('redis')}")
    return True


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Rush Hour Simulation Script")
    parser.add_argument("--orders", type=int, default=TOTAL_ORDERS, help="Number of orders")
    parser.add_argument("--paid-ratio", type=float, default=0.7, help="Share of orders paid")
    parser.add_argument("--skip-health", action="store_true", help="Skip the health check")
    args = parser.parse_args()

    if not args.skip_health and not asyncio.run(check_health()):
        sys.exit(1)

    asyncio.run(run_simulation(args.orders, args.paid_ratio))

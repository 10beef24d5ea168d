"""
Order Burst Simulation

Fires concurrent marmita orders (and a few expenses) at a running server,
then checks that the finance dashboard books exactly one entrada per
order for the same total.
Run from project root: python scripts/simulate.py
"""

import argparse
import asyncio
import random
import sys
import time
from datetime import datetime
from typing import Any

import httpx

# Configuration
API_BASE_URL = "http://localhost:8080"
TOTAL_ORDERS = 50

# Sample data for random orders
FIRST_NAMES = ["Ana", "Bruno", "Carla", "Diego", "Elisa", "Felipe", "Gabriela", "Hugo", "Isabela", "João"]
LAST_NAMES = ["Silva", "Souza", "Oliveira", "Santos", "Lima", "Pereira", "Costa", "Rodrigues"]
STREETS = ["Rua das Flores", "Av. Brasil", "Rua XV de Novembro", "Rua do Comércio", "Av. Paulista"]
NEIGHBORHOODS = ["Centro", "Jardim América", "Vila Nova", "Boa Vista"]
SIZES = ["pequena", "media", "grande"]
PAYMENT_METHODS = ["dinheiro", "cartao", "pix"]
DRINK_REFS = ["drink_1", "drink_2", "drink_3"]
EXPENSES = [("Aluguel", 1500.0, 1), ("Gás", 120.0, 1), ("Freezer novo", 3000.0, 10)]


def generate_random_customer() -> dict[str, Any]:
    """Generate random customer and address."""
    return {
        "customerName": f"{random.choice(FIRST_NAMES)} {random.choice(LAST_NAMES)}",
        "customerPhone": f"(11) 9{random.randint(1000, 9999)}-{random.randint(1000, 9999)}",
        "address": {
            "street": random.choice(STREETS),
            "number": str(random.randint(1, 999)),
            "neighborhood": random.choice(NEIGHBORHOODS),
            "city": "São Paulo",
            "zipCode": f"0{random.randint(1000, 9999)}-{random.randint(100, 999)}",
        },
    }


def generate_order_payload() -> dict[str, Any]:
    """Generate payload for /api/orders."""
    wants_drinks = random.random() < 0.5
    drinks = (
        [{"type": random.choice(DRINK_REFS), "quantity": random.randint(1, 3)}]
        if wants_drinks else []
    )
    house_special = random.random() < 0.5

    return {
        **generate_random_customer(),
        "item": {
            "size": random.choice(SIZES),
            "options": {
                "orderingType": "moda-da-casa" if house_special else "personalizada",
                "houseSpecialId": "house_1" if house_special else None,
                "selectedIngredients": None if house_special else ["ing_1", "ing_2", "ing_4"],
                "salada": random.random() < 0.5,
                "torresmo": random.random() < 0.3,
                "talheres": random.random() < 0.7,
                "quantidade": random.randint(1, 3),
                "wantsDrinks": wants_drinks,
                "drinks": drinks,
            },
        },
        "paymentMethod": random.choice(PAYMENT_METHODS),
    }


async def send_order(client: httpx.AsyncClient, order_num: int) -> dict[str, Any]:
    """Send one order."""
    payload = generate_order_payload()
    start_time = time.time()

    try:
        response = await client.post(f"{API_BASE_URL}/api/orders", json=payload, timeout=30.0)
        elapsed = round(time.time() - start_time, 3)

        if response.status_code == 201:
            order = response.json()["order"]
            return {
                "order_num": order_num,
                "success": True,
                "order_id": order["id"],
                "total": order["total"],
                "time": elapsed,
            }
        return {
            "order_num": order_num,
            "success": False,
            "error": response.text[:100],
            "time": elapsed,
        }
    except httpx.HTTPError as e:
        elapsed = round(time.time() - start_time, 3)
        return {
            "order_num": order_num,
            "success": False,
            "error": str(e)[:100],
            "time": elapsed,
        }


async def run_simulation(num_orders: int = TOTAL_ORDERS, with_expenses: bool = True) -> dict[str, Any]:
    """
    Fire the orders concurrently and cross-check the ledger.

    Args:
        num_orders: Number of orders to simulate
        with_expenses: Also post the sample expenses
    """
    print("=" * 70)
    print("🔥 ORDER BURST SIMULATION")
    print("=" * 70)
    print(f"📋 Total Orders: {num_orders}")
    print(f"🎯 Target: {API_BASE_URL}")
    print(f"⏰ Started: {datetime.now().strftime('%H:%M:%S')}")
    print("=" * 70)

    start_time = time.time()

    async with httpx.AsyncClient() as client:
        before = (await client.get(f"{API_BASE_URL}/api/finances", params={"period": "semana"})).json()

        results = await asyncio.gather(*[send_order(client, i + 1) for i in range(num_orders)])

        if with_expenses:
            for description, amount, installments in EXPENSES:
                response = await client.post(
                    f"{API_BASE_URL}/api/finances/expense",
                    json={"description": description, "amount": amount, "installments": installments},
                )
                print(f"💸 {description}: {response.json().get('message')}")

        after = (await client.get(f"{API_BASE_URL}/api/finances", params={"period": "semana"})).json()

    total_time = round(time.time() - start_time, 2)

    successful = [r for r in results if r["success"]]
    failed = [r for r in results if not r["success"]]

    print("\n" + "=" * 70)
    print("📊 SIMULATION RESULTS")
    print("=" * 70)
    print(f"\n✅ Successful Orders: {len(successful)}/{num_orders}")
    print(f"❌ Failed Orders: {len(failed)}/{num_orders}")
    print(f"⏱️  Total Time: {total_time}s")

    order_revenue = round(sum(r["total"] for r in successful), 2)
    booked_revenue = round(after["totalRevenue"] - before["totalRevenue"], 2)
    print(f"\n💰 Orders total: R$ {order_revenue:.2f}")
    print(f"📒 Ledger delta: R$ {booked_revenue:.2f}")
    ledger_ok = order_revenue == booked_revenue
    print("✅ Ledger matches orders" if ledger_ok else "⚠️ Ledger does NOT match orders")

    if successful:
        avg_time = round(sum(r["time"] for r in successful) / len(successful), 3)
        print(f"\n📈 Average Response: {avg_time}s")

    if failed:
        print("\n⚠️  Failed Order Details (showing first 5):")
        for f in failed[:5]:
            print(f"   Order #{f['order_num']}: {f.get('error', 'Unknown error')}")

    print("=" * 70)

    return {
        "total": num_orders,
        "successful": len(successful),
        "failed": len(failed),
        "ledger_ok": ledger_ok,
        "total_time": total_time,
    }


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Order Burst Simulation")
    parser.add_argument("--orders", type=int, default=TOTAL_ORDERS, help="Number of orders")
    parser.add_argument("--no-expenses", action="store_true", help="Skip sample expenses")
    args = parser.parse_args()

    summary = asyncio.run(run_simulation(args.orders, with_expenses=not args.no_expenses))
    sys.exit(0 if summary["ledger_ok"] and not summary["failed"] else 1)

"""
Runs one dispatch cycle over a snapshot file.

Locally (default) the engine is called in-process; set DISPATCH_URL
(e.g. http://localhost:8000) to post the same body to a running service instead.
"""
import json
import os
import sys
import time
from collections import Counter

import requests

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dispatch.dispatcher import DispatchSnapshot, assign_drivers  # noqa: E402
from dispatch.policy import policy_from_env  # noqa: E402
from drivers.models import Driver  # noqa: E402
from orders.models import Order, PickupSite  # noqa: E402


def load_snapshot(filepath="mock_snapshot.json"):
    with open(filepath, "r") as f:
        return json.load(f)


def to_snapshot(body) -> DispatchSnapshot:
    return DispatchSnapshot(
        orders=[Order(id=str(o["id"]), pickup_id=str(o["cookId"])) for o in body.get("orders", [])],
        drivers=[Driver.new(str(d["id"]), d["lat"], d["lng"]) for d in body.get("drivers", [])],
        pickup_sites=[PickupSite.new(str(c["id"]), c["lat"], c["lng"]) for c in body.get("cooks", [])],
        reliability=body.get("driverScores", {}),
    )


def run_locally(body):
    result = assign_drivers(to_snapshot(body), policy_from_env())
    return {
        "assignments": [
            {"orderId": a.order_id, "driverId": a.driver_id, "score": a.score, "distanceKm": a.distance_km}
            for a in result.assignments
        ],
        "skippedCount": result.skipped_count,
    }


def run_remotely(body, base_url):
    response = requests.post(f"{base_url.rstrip('/')}/assign", json=body, timeout=30)
    response.raise_for_status()
    return response.json()


def run_simulation(filepath="mock_snapshot.json"):
    print("=== STARTING DISPATCH SIMULATION ===")

    body = load_snapshot(filepath)
    print(f"Loaded {len(body.get('orders', []))} Orders, {len(body.get('drivers', []))} Drivers "
          f"and {len(body.get('cooks', []))} Cooks.\n")

    base_url = os.getenv("DISPATCH_URL")
    start_time = time.time()
    if base_url:
        print(f"Posting snapshot to {base_url}/assign ...")
        response = run_remotely(body, base_url)
    else:
        print("Running the assignment engine in-process ...")
        response = run_locally(body)
    print(f"Cycle finished in {time.time() - start_time:.2f}s.\n")

    assignments = response["assignments"]
    load = Counter(a["driverId"] for a in assignments)

    print("--- Assignment Summary ---")
    print(f"Orders Assigned: {len(assignments)} / {len(body.get('orders', []))}")
    print(f"Orders Skipped: {response['skippedCount']}")
    print(f"Distinct Drivers Used: {len(load)}")
    if assignments:
        mean_km = sum(a["distanceKm"] for a in assignments) / len(assignments)
        print(f"Mean Pickup Distance: {mean_km:.2f} km")
    print("Busiest Drivers:")
    for driver_id, count in load.most_common(5):
        print(f"  {driver_id}: {count} orders")

    print("\n=== SIMULATION COMPLETE ===")
    return response


if __name__ == "__main__":
    run_simulation(sys.argv[1] if len(sys.argv) > 1 else "mock_snapshot.json")

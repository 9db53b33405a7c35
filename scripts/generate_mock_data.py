import json
import uuid

import numpy as np
import pandas as pd


def generate_mock_snapshot(num_orders=200, num_cooks=30, num_drivers=100, output_file="mock_snapshot.json", seed=None):
    """
    Generates a realistic /assign request body for exercising the dispatch engine.
    It uses a fixed number of cooks (pickups) so several orders share a pickup site,
    scatters drivers around the city and scores most (not all) of them.
    A handful of orders point at unknown cooks to exercise the skip path.
    """
    rng = np.random.default_rng(seed)

    # Center around Harare, Zimbabwe
    CENTER_LAT = -17.824858
    CENTER_LNG = 31.053028

    # 1. Cooks (pickups) within a ~5km radius (roughly 0.05 degrees)
    cooks = pd.DataFrame({
        "id": [f"c_{str(uuid.uuid4())[:8]}" for _ in range(num_cooks)],
        "lat": np.round(CENTER_LAT + rng.uniform(-0.05, 0.05, num_cooks), 6),
        "lng": np.round(CENTER_LNG + rng.uniform(-0.05, 0.05, num_cooks), 6),
    })

    # 2. Drivers scattered around the city center (roughly +/- 10km)
    drivers = pd.DataFrame({
        "id": [f"DRV-{str(i + 1).zfill(3)}" for i in range(num_drivers)],
        "lat": np.round(CENTER_LAT + rng.uniform(-0.075, 0.075, num_drivers), 6),
        "lng": np.round(CENTER_LNG + rng.uniform(-0.075, 0.075, num_drivers), 6),
    })

    # 3. Reliability: ~85% of drivers have a history, the rest use the default
    scored = drivers.sample(frac=0.85, random_state=seed)
    driver_scores = {
        driver_id: float(score)
        for driver_id, score in zip(scored["id"], np.round(rng.normal(60, 15, len(scored)).clip(0, 100), 1))
    }

    # 4. Orders; ~2% reference a cook that is not in the snapshot
    cook_ids = rng.choice(cooks["id"].to_numpy(), size=num_orders)
    missing = rng.random(num_orders) < 0.02
    orders = pd.DataFrame({
        "id": [f"o_{str(i + 1).zfill(6)}" for i in range(num_orders)],
        "cookId": np.where(missing, "c_missing", cook_ids),
    })

    snapshot = {
        "orders": orders.to_dict(orient="records"),
        "drivers": drivers.to_dict(orient="records"),
        "cooks": cooks.to_dict(orient="records"),
        "driverScores": driver_scores,
    }

    with open(output_file, "w") as f:
        json.dump(snapshot, f, indent=2)
    print(f"Generated {num_orders} orders, {num_cooks} cooks and {num_drivers} drivers into '{output_file}'")

    # Quick preview of pickup density
    print("\nTop 5 Cooks (orders sharing a pickup):")
    for cook_id, count in orders["cookId"].value_counts().head(5).items():
        print(f"  {cook_id}: {count} orders")

    return snapshot


if __name__ == "__main__":
    generate_mock_snapshot()

import os
import sys

import requests

base_url = os.getenv("FITOUT_BASE_URL", "http://localhost:8000").rstrip("/")


def main() -> int:
    health_response = requests.get(f"{base_url}/ready", timeout=15)
    health_response.raise_for_status()

    inventory_response = requests.get(
        f"{base_url}/inventory",
        params={"limit": 5, "offset": 0},
        timeout=15,
    )
    inventory_response.raise_for_status()

    preview_response = requests.post(
        f"{base_url}/inventory/balance-preview",
        json={
            "unit_price": 10,
            "receipts": [{"date": "2024-01-01", "quantity": "20"}],
            "dispatches": [{"date": "2024-01-02", "quantity": "5"}],
            "returns": [{"date": "2024-01-03", "quantity": "2"}],
        },
        timeout=15,
    )
    preview_response.raise_for_status()

    inventory = inventory_response.json()
    preview = preview_response.json()
    print(f"Database ready: {health_response.json()['ok']}")
    print(f"Inventory items: {inventory['pagination']['total']}")
    print(f"Preview stock: {preview['display']['current_stock']} ({preview['display']['current_value']})")
    return 0


if __name__ == "__main__":
    try:
        raise SystemExit(main())
    except requests.RequestException as exc:
        print(f"Inventory API probe failed: {exc}", file=sys.stderr)
        raise SystemExit(1)

"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the domain's validation rules
(positive quantities, complete addresses, known carriers) and use the
camelCase field names the API accepts.

Documents are checked against the order source the service reads, so
journeys draw their orders from ``OPEN_ORDERS``, loaded once per run from
that same source (``PICKPACK_API_URL``).
"""

import random
import uuid

import requests
from faker import Faker

fake = Faker()

CARRIERS = ["FEDEX", "UPS", "DHL", "USPS"]
SERVICE_TYPES = ["Ground", "Express", "Overnight"]

# order id -> lines with something left to fulfil
OPEN_ORDERS: dict[str, list[dict]] = {}


def _first(row: dict, *keys, default=None):
    for key in keys:
        if row.get(key) is not None:
            return row[key]
    return default


def _open_lines(order: dict) -> list[dict]:
    """Order lines at their remaining quantity, in the camelCase the API takes."""
    lines = []
    for line in _first(order, "orderLines", "order_lines", "lines", default=[]):
        ordered = _first(line, "orderedQuantity", "ordered_quantity", "quantity", default=0)
        fulfilled = _first(line, "fulfilledQuantity", "fulfilled_quantity", "fulfilledQty", default=0)
        if ordered - fulfilled <= 0:
            continue
        product = line.get("product") or {}
        lines.append(
            {
                "orderLineId": str(_first(line, "orderLineId", "order_line_id", "id")),
                "productId": str(_first(line, "productId", "product_id")),
                "sku": _first(line, "sku", default=product.get("sku")),
                "productName": _first(line, "productName", "product_name", default=product.get("name")),
                "quantity": ordered - fulfilled,
            }
        )
    return lines


def load_open_orders(base_url: str, take: int = 1000) -> int:
    """Fill ``OPEN_ORDERS`` from the order source; returns how many were found."""
    response = requests.get(f"{base_url.rstrip('/')}/orders", params={"skip": 0, "take": take}, timeout=10)
    response.raise_for_status()
    body = response.json()
    rows = body.get("data", []) if isinstance(body, dict) else body
    OPEN_ORDERS.clear()
    for order in rows:
        lines = _open_lines(order)
        if lines:
            OPEN_ORDERS[str(order["id"])] = lines
    return len(OPEN_ORDERS)


def open_order(num_lines: int | None = None) -> tuple[str | None, list[dict]]:
    """A random open order and up to ``num_lines`` of its remaining lines.

    Returns ``(None, [])`` when no open orders were loaded.
    """
    if not OPEN_ORDERS:
        return None, []
    order, lines = random.choice(list(OPEN_ORDERS.items()))
    lines = random.sample(lines, min(num_lines or random.randint(1, 4), len(lines)))
    return order, [dict(line) for line in lines]


def warehouse_id() -> str:
    return random.choice(["WH-EAST", "WH-WEST", "WH-CENTRAL"])


def pick_list_data(order: str, warehouse: str, lines: list[dict]) -> dict:
    """CreatePickListRequest payload for every line at its full quantity."""
    return {
        "orderId": order,
        "warehouseId": warehouse,
        "notes": fake.sentence() if random.random() < 0.2 else None,
        "items": [
            {**line, "binLocation": f"{random.choice('ABCD')}-{random.randint(1, 20)}-{random.randint(1, 5)}"}
            for line in lines
        ],
    }


def pack_slip_data(order: str, warehouse: str, pick_list: str | None, lines: list[dict], picked: dict) -> dict:
    """CreatePackSlipRequest payload packing what was picked."""
    package_count = random.randint(1, 3)
    items = []
    for line in lines:
        quantity = picked.get(line["orderLineId"], line["quantity"])
        if quantity > 0:
            items.append(
                {
                    "orderLineId": line["orderLineId"],
                    "productId": line["productId"],
                    "sku": line["sku"],
                    "productName": line["productName"],
                    "quantity": quantity,
                }
            )
    return {
        "orderId": order,
        "warehouseId": warehouse,
        "pickListId": pick_list,
        "packedBy": fake.first_name(),
        "packageCount": package_count,
        "weight": round(random.uniform(0.5, 25.0), 2),
        "dimensions": {
            "length": round(random.uniform(10, 80), 1),
            "width": round(random.uniform(10, 60), 1),
            "height": round(random.uniform(5, 40), 1),
        },
        "items": items,
    }


def address_data(with_state: bool = True) -> dict:
    """AddressPayload with every required part; the state is optional."""
    address = {
        "name": fake.name()[:255],
        "address": fake.street_address()[:255],
        "city": fake.city()[:100],
        "postalCode": fake.zipcode()[:20],
        "country": "US",
    }
    if with_state:
        address["state"] = fake.state_abbr()
    return address


def shipping_label_data(order: str, pack_slip: str | None, weight: float | None = None) -> dict:
    return {
        "orderId": order,
        "packSlipId": pack_slip,
        "carrier": random.choice(CARRIERS),
        "serviceType": random.choice(SERVICE_TYPES),
        "fromAddress": address_data(),
        "toAddress": address_data(with_state=random.random() < 0.8),
        "weight": weight,
    }


def tracking_number(carrier: str = "TRK") -> str:
    return f"{carrier}{uuid.uuid4().hex[:12].upper()}"

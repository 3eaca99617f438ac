"""Master data over HTTP: reads the fulfillment API with requests."""

import requests
import structlog
from pydantic import ValidationError as PayloadError

from pickpack.api.mapping import unwrap_collection
from pickpack.api.schemas import OrderPayload, PackSlipResponse, PickListResponse, WarehousePayload
from pickpack.shared.errors import SourceUnavailable
from pickpack.sources.port import MasterDataPort

logger = structlog.get_logger(__name__)

PAGE_SIZE = 1000


class HttpMasterData(MasterDataPort):
    def __init__(self, base_url: str = "", timeout: float | None = None, session=None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _get(self, path: str, params: dict | None = None) -> list[dict]:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            return unwrap_collection(response.json())
        except (requests.RequestException, ValueError) as exc:
            logger.warning("Master data request failed", path=path, error=str(exc))
            raise SourceUnavailable(f"Could not load {path}") from exc

    def _parse(self, model, rows: list[dict], path: str) -> list:
        try:
            return [model.model_validate(row) for row in rows]
        except PayloadError as exc:
            logger.warning("Master data payload rejected", path=path, error=str(exc))
            raise SourceUnavailable(f"Unexpected payload from {path}") from exc

    def list_orders(self):
        rows = self._get("/orders", {"skip": 0, "take": PAGE_SIZE})
        return self._parse(OrderPayload, rows, "/orders")

    def get_order(self, order_id):
        path = f"/orders/{order_id}"
        try:
            response = self.session.get(f"{self.base_url}{path}", timeout=self.timeout)
            if response.status_code == 404:
                return None
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.warning("Master data request failed", path=path, error=str(exc))
            raise SourceUnavailable(f"Could not load {path}") from exc
        if isinstance(payload, dict) and isinstance(payload.get("data"), dict):
            payload = payload["data"]
        return self._parse(OrderPayload, [payload], path)[0]

    def list_warehouses(self):
        return self._parse(WarehousePayload, self._get("/warehouses"), "/warehouses")

    def list_pick_lists(self, order_id=None):
        params = {"skip": 0, "take": PAGE_SIZE}
        if order_id:
            params["orderId"] = order_id
        return self._parse(PickListResponse, self._get("/pick-lists", params), "/pick-lists")

    def list_pack_slips(self, order_id=None):
        params = {"skip": 0, "take": PAGE_SIZE}
        if order_id:
            params["orderId"] = order_id
        return self._parse(PackSlipResponse, self._get("/pack-slips", params), "/pack-slips")

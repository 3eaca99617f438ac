"""Shipping Label Builder: carrier details and both addresses for an order's shipment.

Conveniences, all overridable before submission: the sender address is
filled from the default warehouse, the recipient name from the order's
customer, and the weight from the chosen pack slip. Choosing another order
or pack slip replaces prefilled values that were not edited.
"""

import structlog
from protean.exceptions import ValidationError

from pickpack.api.mapping import dimensions_or_none, parse_optional_float
from pickpack.api.schemas import AddressPayload, CreateShippingLabelRequest, DimensionsPayload, ShippingLabelResponse
from pickpack.builders.base import DocumentBuilder
from pickpack.shared.errors import SourceUnavailable
from pickpack.shared.value_objects import ADDRESS_REQUIRED_FIELDS
from pickpack.shipping_label.shipping_label import Carrier

ADDRESS_FIELDS = ("name", "address", "city", "state", "postal_code", "country")

_ADDRESS_LABELS = {"from_address": "Sender", "to_address": "Recipient"}

logger = structlog.get_logger(__name__)


def blank_address() -> dict:
    return {part: "" for part in ADDRESS_FIELDS}


def missing_address_fields(address: dict) -> list[str]:
    return [part for part in ADDRESS_REQUIRED_FIELDS if not str(address.get(part) or "").strip()]


class ShippingLabelBuilder(DocumentBuilder):
    document_name = "shipping label"
    path = "/shipping-labels"
    response_model = ShippingLabelResponse

    def _reset(self) -> None:
        super()._reset()
        self.pack_slips: list = []
        self.pack_slip = None
        self.carrier: str = Carrier.FEDEX.value
        self.service_type: str | None = None
        self.tracking_number: str | None = None
        self.weight: str | float | None = ""
        self.length: str | float | None = ""
        self.width: str | float | None = ""
        self.height: str | float | None = ""
        self.notes: str | None = None
        self.from_address = blank_address()
        self.to_address = blank_address()
        self._prefilled_name = ""
        self._prefilled_weight = None

    def open(self) -> None:
        super().open()
        try:
            warehouse = self.master_data.default_warehouse()
        except SourceUnavailable as exc:
            logger.warning("Default warehouse unavailable", document=self.document_name, error=exc.message)
            warehouse = None
        if warehouse is None:
            self.notices.append("No warehouses available")
            return
        self.from_address = {
            "name": warehouse.name,
            "address": warehouse.address or "",
            "city": warehouse.city or "",
            "state": warehouse.state or "",
            "postal_code": warehouse.postal_code or "",
            "country": warehouse.country or "",
        }

    def choose_order(self, order_id) -> None:
        self.order = self._find_order(order_id)
        self.pack_slips = self._load(self.master_data.list_pack_slips, "pack slips", self.order.id)
        self._use_pack_slip(None)
        # Replace the previous order's customer unless the name was typed over.
        if self.to_address["name"] == self._prefilled_name:
            self.to_address["name"] = self.order.customer_name or ""
            self._prefilled_name = self.to_address["name"]

    def choose_pack_slip(self, pack_slip_id) -> None:
        """Cover one pack slip of the chosen order; ``None`` labels the order as a whole."""
        if pack_slip_id is None:
            self._use_pack_slip(None)
            return
        if self.order is None:
            raise ValidationError({"order_id": ["Please select an order"]})
        pack_slip = next((p for p in self.pack_slips if p.id == str(pack_slip_id)), None)
        if pack_slip is None or pack_slip.order_id != self.order.id:
            raise ValidationError({"pack_slip_id": ["Pack slip is not available for this order"]})
        self._use_pack_slip(pack_slip)

    def _use_pack_slip(self, pack_slip) -> None:
        """Swap the covered pack slip and the weight prefilled from it."""
        if self._prefilled_weight is not None and self.weight == self._prefilled_weight:
            self.weight = ""
        self.pack_slip = pack_slip
        self._prefilled_weight = None
        if pack_slip is not None and pack_slip.weight:
            self.weight = pack_slip.weight
            self._prefilled_weight = pack_slip.weight

    def set_from_address(self, **parts) -> None:
        self._update_address(self.from_address, parts)

    def set_to_address(self, **parts) -> None:
        self._update_address(self.to_address, parts)

    @staticmethod
    def _update_address(address: dict, parts: dict) -> None:
        unknown = set(parts) - set(ADDRESS_FIELDS)
        if unknown:
            raise ValidationError({"address": [f"Unknown address fields: {', '.join(sorted(unknown))}"]})
        address.update(parts)

    def build_request(self) -> dict:
        if self.order is None:
            raise ValidationError({"order_id": ["Please select an order"]})
        if not self.carrier:
            raise ValidationError({"carrier": ["Please select a carrier"]})
        if self.carrier not in {c.value for c in Carrier}:
            raise ValidationError({"carrier": [f"Unknown carrier: {self.carrier}"]})

        for field_name in ("from_address", "to_address"):
            missing = missing_address_fields(getattr(self, field_name))
            if missing:
                raise ValidationError(
                    {field_name: [f"{_ADDRESS_LABELS[field_name]} address is incomplete: {', '.join(missing)}"]}
                )

        dimensions = dimensions_or_none(self.length, self.width, self.height)
        request = CreateShippingLabelRequest(
            order_id=self.order.id,
            pack_slip_id=self.pack_slip.id if self.pack_slip is not None else None,
            carrier=self.carrier,
            service_type=self.service_type or None,
            tracking_number=self.tracking_number or None,
            from_address=AddressPayload(**_clean(self.from_address)),
            to_address=AddressPayload(**_clean(self.to_address)),
            weight=parse_optional_float(self.weight, "weight"),
            dimensions=DimensionsPayload(**dimensions) if dimensions else None,
            notes=self.notes or None,
        )
        return request.model_dump(by_alias=True, exclude_none=True)


def _clean(address: dict) -> dict:
    """Trimmed parts; an empty state is left out."""
    cleaned = {part: str(address.get(part) or "").strip() for part in ADDRESS_FIELDS}
    if not cleaned["state"]:
        cleaned["state"] = None
    return cleaned

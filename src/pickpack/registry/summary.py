"""Dashboard counts per document status.

Buckets:
    Pick Lists      total, draft, in progress (ASSIGNED + IN_PROGRESS),
                    completed, cancelled
    Pack Slips      total, packing, packed, shipped, cancelled
    Shipping Labels total, generated (PRINTED), shipped, cancelled
"""

from collections import Counter

from pickpack.api.schemas import CamelModel
from pickpack.pack_slip.pack_slip import PACK_SLIP_LIFECYCLE, PackSlipStatus
from pickpack.pick_list.pick_list import PICK_LIST_LIFECYCLE, PickListStatus
from pickpack.shipping_label.shipping_label import SHIPPING_LABEL_LIFECYCLE, ShippingLabelStatus


class PickListCounts(CamelModel):
    total: int = 0
    draft: int = 0
    in_progress: int = 0
    completed: int = 0
    cancelled: int = 0


class PackSlipCounts(CamelModel):
    total: int = 0
    packing: int = 0
    packed: int = 0
    shipped: int = 0
    cancelled: int = 0


class ShippingLabelCounts(CamelModel):
    total: int = 0
    generated: int = 0
    shipped: int = 0
    cancelled: int = 0


class FulfillmentSummary(CamelModel):
    pick_lists: PickListCounts
    pack_slips: PackSlipCounts
    shipping_labels: ShippingLabelCounts


def _tally(documents, lifecycle) -> Counter:
    # Documents with a status the lifecycle does not know still count towards the total.
    tally = Counter()
    for doc in documents:
        if lifecycle.is_legal(doc.status):
            tally[lifecycle.parse(doc.status)] += 1
    return tally


def summarize(pick_lists=(), pack_slips=(), shipping_labels=()) -> FulfillmentSummary:
    pick_lists, pack_slips, shipping_labels = list(pick_lists), list(pack_slips), list(shipping_labels)

    picks = _tally(pick_lists, PICK_LIST_LIFECYCLE)
    packs = _tally(pack_slips, PACK_SLIP_LIFECYCLE)
    labels = _tally(shipping_labels, SHIPPING_LABEL_LIFECYCLE)

    return FulfillmentSummary(
        pick_lists=PickListCounts(
            total=len(pick_lists),
            draft=picks[PickListStatus.DRAFT],
            in_progress=picks[PickListStatus.ASSIGNED] + picks[PickListStatus.IN_PROGRESS],
            completed=picks[PickListStatus.COMPLETED],
            cancelled=picks[PickListStatus.CANCELLED],
        ),
        pack_slips=PackSlipCounts(
            total=len(pack_slips),
            packing=packs[PackSlipStatus.PACKING],
            packed=packs[PackSlipStatus.PACKED],
            shipped=packs[PackSlipStatus.SHIPPED],
            cancelled=packs[PackSlipStatus.CANCELLED],
        ),
        shipping_labels=ShippingLabelCounts(
            total=len(shipping_labels),
            generated=labels[ShippingLabelStatus.PRINTED],
            shipped=labels[ShippingLabelStatus.SHIPPED],
            cancelled=labels[ShippingLabelStatus.CANCELLED],
        ),
    )

"""Allocation checks run by the command handlers before a document is saved.

Builders bound quantities by what they loaded; the handlers check again
against the current upstream document, so a request sent straight to the
API is held to the same ceilings.
"""

import structlog
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from pickpack.allocation import check_allocation, pick_ceilings, pick_list_ceilings, requested_quantities
from pickpack.pack_slip.pack_slip import PackSlip
from pickpack.pick_list.pick_list import PickList
from pickpack.shared.errors import SourceUnavailable
from pickpack.sources import get_master_data

logger = structlog.get_logger(__name__)


def check_against_order(order_id, items_data) -> None:
    """Bound each order line by its remaining (ordered minus fulfilled) quantity."""
    try:
        order = get_master_data().get_order(order_id)
    except SourceUnavailable as exc:
        logger.warning("Order lookup failed", order_id=str(order_id), error=exc.message)
        raise ValidationError({"order_id": [f"Order {order_id} could not be verified"]}) from exc
    if order is None:
        raise ValidationError({"order_id": ["Order not found"]})

    requested = requested_quantities(items_data)
    check_allocation(pick_ceilings(order), requested)
    logger.info("Quantities checked against order", order_id=str(order_id), line_count=len(requested))


def check_against_pick_list(pick_list_id, order_id, items_data) -> None:
    """Bound each order line by what the pick list picked (or requested)."""
    try:
        pick_list = current_domain.repository_for(PickList).get(pick_list_id)
    except ObjectNotFoundError:
        raise ValidationError({"pick_list_id": ["Pick list not found"]}) from None

    if str(pick_list.order_id) != str(order_id):
        raise ValidationError({"pick_list_id": ["Pick list belongs to a different order"]})

    requested = requested_quantities(items_data)
    check_allocation(pick_list_ceilings(pick_list), requested)
    logger.info(
        "Pack slip quantities checked against pick list",
        pick_list_id=str(pick_list.id),
        order_id=str(order_id),
        line_count=len(requested),
    )


def check_pack_slip(pack_slip_id, order_id) -> None:
    try:
        pack_slip = current_domain.repository_for(PackSlip).get(pack_slip_id)
    except ObjectNotFoundError:
        raise ValidationError({"pack_slip_id": ["Pack slip not found"]}) from None
    if str(pack_slip.order_id) != str(order_id):
        raise ValidationError({"pack_slip_id": ["Pack slip belongs to a different order"]})

"""Pick-Pack-Ship bounded context: outbound fulfillment documents.

Owns the chain of derived documents that consume an order's quantities:
Pick List → Pack Slip → Shipping Label. Orders, warehouses and carriers are
owned elsewhere and are only read through ports.
"""

from protean.domain import Domain

pickpack = Domain(name="pickpack")

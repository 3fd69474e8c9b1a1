"""Product status values and the checkpoint-driven status derivation."""

from enum import Enum


class ProductStatus(str, Enum):
    CREATED = "created"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    SOLD = "sold"
    RECALLED = "recalled"


class CheckpointType(str, Enum):
    MANUFACTURE = "manufacture"
    SHIPPING = "shipping"
    CUSTOMS = "customs"
    WAREHOUSE = "warehouse"
    RETAIL = "retail"
    DELIVERY = "delivery"
    TRANSFER = "transfer"
    RECALL = "recall"


_STATUS_BY_CHECKPOINT = {
    CheckpointType.DELIVERY: ProductStatus.DELIVERED,
    CheckpointType.RETAIL: ProductStatus.SOLD,
    CheckpointType.RECALL: ProductStatus.RECALLED,
}


def derive_status(current: ProductStatus | str, checkpoint_type: CheckpointType | str) -> ProductStatus:
    """Status a product moves to after a checkpoint of ``checkpoint_type``.

    Recalled is absorbing: no checkpoint moves a product out of it. The
    manufacture checkpoint written at registration leaves a product in
    ``created``; on a product that has already moved it counts as any other
    in-transit checkpoint.
    """
    current = ProductStatus(current)
    checkpoint_type = CheckpointType(checkpoint_type)
    if current is ProductStatus.RECALLED:
        return current
    if (
        checkpoint_type is CheckpointType.MANUFACTURE
        and current is ProductStatus.CREATED
    ):
        return current
    return _STATUS_BY_CHECKPOINT.get(checkpoint_type, ProductStatus.IN_TRANSIT)

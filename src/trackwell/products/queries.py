"""Product lookups shared by the ledger, transfer and certification services."""

from sqlalchemy.ext.asyncio import AsyncSession

from trackwell.common.exceptions import NotFoundError
from trackwell.products.models import ProductModel


async def load_product(session: AsyncSession, product_id: int) -> ProductModel:
    product = await session.get(ProductModel, product_id)
    if product is None:
        raise NotFoundError(f"Product {product_id} not found")
    return product

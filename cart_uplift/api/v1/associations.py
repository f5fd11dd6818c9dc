"""
Product association endpoint
"""

from fastapi import APIRouter, Depends, HTTPException, Query

from cart_uplift.core.logging import get_logger
from cart_uplift.domains.affinity.models import AssociationMode
from cart_uplift.domains.affinity.services import ProductAssociationService

logger = get_logger(__name__)
router = APIRouter(prefix="/api/v1", tags=["product-associations"])


def get_association_service() -> ProductAssociationService:
    return ProductAssociationService()


@router.get("/product-associations")
async def get_product_associations(
    shop_id: str = Query(..., min_length=1),
    mode: AssociationMode = Query(AssociationMode.ADVANCED),
    debug: bool = Query(False),
    service: ProductAssociationService = Depends(get_association_service),
):
    """Rank co-purchased product pairs as bundle opportunities"""
    try:
        report = await service.get_associations(shop_id, mode=mode, debug=debug)
    except Exception as e:
        logger.error(f"Failed to compute product associations for {shop_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to compute associations")

    return report.model_dump(by_alias=True, exclude_none=True, mode="json")

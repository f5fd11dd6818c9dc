"""
Scheduled similarity computation endpoint
"""

import secrets
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query

from cart_uplift.core.config import settings
from cart_uplift.core.logging import get_logger
from cart_uplift.domains.affinity.models import SimilarityRunSummary
from cart_uplift.domains.affinity.services import SimilarityComputationService

logger = get_logger(__name__)
router = APIRouter(prefix="/api/v1/cron", tags=["similarity-jobs"])


def _matches(provided: Optional[str], expected: str) -> bool:
    if not provided or not expected:
        return False
    return secrets.compare_digest(provided, expected)


async def verify_cron_access(
    authorization: Optional[str] = Header(None),
    secret: Optional[str] = Query(None),
) -> None:
    """Accept a Bearer cron secret or the admin secret as a query parameter"""
    bearer = None
    if authorization and authorization.startswith("Bearer "):
        bearer = authorization[len("Bearer ") :]

    if _matches(bearer, settings.security.CRON_SECRET):
        return
    if _matches(secret, settings.security.ADMIN_SECRET):
        return

    logger.warning("Unauthorized similarity computation request")
    raise HTTPException(status_code=401, detail="Unauthorized")


def get_similarity_service() -> SimilarityComputationService:
    return SimilarityComputationService()


@router.api_route(
    "/compute-similarities",
    methods=["GET", "POST"],
    dependencies=[Depends(verify_cron_access)],
)
async def compute_similarities(
    service: SimilarityComputationService = Depends(get_similarity_service),
):
    """Recompute product similarities for every enabled shop"""
    summary: SimilarityRunSummary = await service.compute_for_all_shops()
    if not summary.success:
        raise HTTPException(status_code=500, detail=summary.error)
    return summary.model_dump(by_alias=True, mode="json")

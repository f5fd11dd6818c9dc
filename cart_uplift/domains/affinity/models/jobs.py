"""
Result models for the similarity batch job
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ShopSimilarityStatus(str, Enum):
    COMPUTED = "computed"
    NO_DATA = "no_data"
    FAILED = "failed"


class ShopSimilarityResult(BaseModel):
    """Outcome of one shop's similarity computation"""

    model_config = ConfigDict(populate_by_name=True)

    shop: str
    analyzed: int = 0
    similarities_created: int = Field(0, alias="similaritiesCreated")
    deleted: int = 0
    status: ShopSimilarityStatus
    error: Optional[str] = None


class SimilarityRunSummary(BaseModel):
    """Synchronous summary returned to the scheduler"""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    total_shops: int = Field(0, alias="totalShops")
    successful_shops: int = Field(0, alias="successfulShops")
    total_deleted: int = Field(0, alias="totalDeleted")
    total_similarities: int = Field(0, alias="totalSimilarities")
    breakdown: Dict[str, int] = Field(default_factory=dict)
    results: List[ShopSimilarityResult] = Field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def from_results(cls, results: List[ShopSimilarityResult]) -> "SimilarityRunSummary":
        breakdown = {status.value: 0 for status in ShopSimilarityStatus}
        for result in results:
            breakdown[result.status.value] += 1

        return cls(
            success=True,
            total_shops=len(results),
            successful_shops=breakdown[ShopSimilarityStatus.COMPUTED.value]
            + breakdown[ShopSimilarityStatus.NO_DATA.value],
            total_deleted=sum(r.deleted for r in results),
            total_similarities=sum(r.similarities_created for r in results),
            breakdown=breakdown,
            results=results,
        )

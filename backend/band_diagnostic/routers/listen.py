"""
Listening Module Backend Router

Bands the fixed diagnostic listening set from its raw score and reviews the
items answered incorrectly.
"""

from __future__ import annotations
import logging
from typing import List, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from ..listening import listening_band, review_listening
from ..models import ListeningItem, ListeningReview
from ..settings import settings

# Initialize FastAPI router for listening endpoints
router = APIRouter(prefix="/listen", tags=["listening"])

logger = logging.getLogger(__name__)


class ListeningBandRequest(BaseModel):
    """
    Request model for banding a listening attempt.

    Attributes:
        raw: Number of items answered correctly
        wrong_ids: Identifiers of the items answered incorrectly
        items: The item set, used to explain wrong answers
    """
    raw: Optional[int] = Field(default=None, ge=0)
    wrong_ids: List[str] = Field(default_factory=list)
    items: List[ListeningItem] = Field(default_factory=list)


class ListeningBandResponse(BaseModel):
    band: Optional[float] = None
    review: ListeningReview


@router.post("/band", response_model=ListeningBandResponse)
def band(req: ListeningBandRequest):
    """
    Map the raw listening score to a band and build the error review.

    The perfect-score bucket depends on DIAGNOSTIC_MODE: capped at the
    diagnostic ceiling when on, LISTENING_TOP_BAND when off.
    """
    value = listening_band(req.raw, settings.band_policy())
    review = review_listening(req.wrong_ids, req.items)
    logger.info("listening band: raw=%s band=%s wrong=%d", req.raw, value, len(review.wrong))
    return ListeningBandResponse(band=value, review=review)

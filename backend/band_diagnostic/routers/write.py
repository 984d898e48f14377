from __future__ import annotations
import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from ..aggregate import combine_task_bands
from ..bands import min_words_for, score_criteria
from ..models import CapContext, CriteriaScore, CriterionBands
from ..settings import settings


router = APIRouter(prefix="/write", tags=["writing"])

logger = logging.getLogger(__name__)


class WritingBandRequest(BaseModel):
	criteria: CriterionBands
	# "Task 1" or "Task 2"; decides the minimum word count
	task_type: str = "Task 2"
	word_count: Optional[int] = Field(default=None, ge=0)
	off_topic: bool = False
	on_topic_percent: Optional[float] = Field(default=None, ge=0, le=100)
	diagnostic: Optional[bool] = None


class CombineRequest(BaseModel):
	task_bands: List[Optional[float]]


class CombineResponse(BaseModel):
	band: Optional[float] = None


@router.post("/band", response_model=CriteriaScore)
def writing_band(req: WritingBandRequest):
	if not req.criteria.present():
		raise HTTPException(status_code=400, detail="at least one criterion band is required")
	policy = settings.band_policy()
	context = CapContext(
		off_topic=req.off_topic,
		on_topic_percent=req.on_topic_percent,
		word_count=req.word_count,
		min_words=min_words_for(req.task_type, policy),
		diagnostic=req.diagnostic,
	)
	result = score_criteria(req.criteria, context, policy)
	logger.info("writing band (%s): overall=%s caps=%s", req.task_type, result.overall, result.caps_applied)
	return result


@router.post("/combine", response_model=CombineResponse)
def combine(req: CombineRequest):
	# Writing skill band = rounded mean of the task bands that were submitted
	return CombineResponse(band=combine_task_bands(req.task_bands, settings.band_policy()))

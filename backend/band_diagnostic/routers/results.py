from __future__ import annotations
import logging
from typing import List, Optional

from fastapi import APIRouter
from pydantic import BaseModel

from ..aggregate import aggregate, aggregate_skills
from ..models import OverallResult, SkillScore
from ..settings import settings


router = APIRouter(prefix="/results", tags=["results"])

logger = logging.getLogger(__name__)


class AggregateRequest(BaseModel):
	listening: Optional[float] = None
	reading: Optional[float] = None
	writing: Optional[float] = None
	speaking: Optional[float] = None
	# Uniform skill records; when given, the named fields above are ignored
	skills: Optional[List[SkillScore]] = None


@router.post("/aggregate", response_model=OverallResult)
def aggregate_results(req: AggregateRequest):
	policy = settings.band_policy()
	if req.skills is not None:
		result = aggregate_skills(req.skills, policy)
	else:
		result = aggregate(req.listening, req.reading, req.writing, req.speaking, policy)
	logger.info("overall band: %s", result.overall)
	return result

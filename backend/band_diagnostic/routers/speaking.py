"""
Speaking Module
===============

Stateless endpoints for the speaking section of the diagnostic.

The recognizer's transcript and segments come in from the client (speech
recognition happens upstream); this module cleans the transcript, measures
fluency features for the criterion scorer, and bands the criterion scores that
scorer returns.

API Endpoints:
- POST /speaking/process: Normalize a transcript and extract audio features
- POST /speaking/band: Band the four speaking criteria into an overall score
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from ..bands import score_criteria
from ..models import CapContext, CriteriaScore, SpeakingCriterionBands
from ..pipeline import SpeechAnalysis, process_speech
from ..settings import settings


router = APIRouter(prefix="/speaking", tags=["speaking"])

logger = logging.getLogger(__name__)


# ============================================================================
# REQUEST/RESPONSE MODELS
# ============================================================================

class ProcessRequest(BaseModel):
	"""
	Recognizer output for one spoken response.

	Segments are passed through as received (verbose JSON from the recognizer);
	entries without usable start/end times are ignored.
	"""
	transcript: str = ""
	segments: List[Dict[str, Any]] = Field(default_factory=list)


class BandRequest(BaseModel):
	"""
	Criterion scores returned by the speaking scorer.

	Attributes:
		bands: Raw FC/LR/GRA/P scores; missing criteria are left out of the mean
		diagnostic: Override the deployment's diagnostic ceiling for this request
	"""
	bands: SpeakingCriterionBands
	diagnostic: Optional[bool] = None


# ============================================================================
# API ENDPOINTS
# ============================================================================

@router.post("/process", response_model=SpeechAnalysis, response_model_by_alias=True)
def process(req: ProcessRequest):
	analysis = process_speech(req.transcript, req.segments, settings.prosody_config())
	logger.info(
		"speaking transcript processed: words=%d wpm=%.1f pauses=%d",
		analysis.audio_features.word_count,
		analysis.audio_features.wpm,
		analysis.audio_features.pause_count,
	)
	return analysis


@router.post("/band", response_model=CriteriaScore)
def band(req: BandRequest):
	if not req.bands.present():
		raise HTTPException(status_code=400, detail="at least one criterion band is required")
	result = score_criteria(req.bands, CapContext(diagnostic=req.diagnostic), settings.band_policy())
	logger.info("speaking band: overall=%s caps=%s", result.overall, result.caps_applied)
	return result

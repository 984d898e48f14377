"""
Cross-Section Aggregator

Combines per-skill bands into an overall band. Skills that were not attempted
are left out of the mean rather than counted as zero, so a two-skill attempt is
averaged over exactly those two skills.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional

from .bands import mean_band, round_band
from .models import OverallResult, SkillScore
from .settings import BandPolicy


logger = logging.getLogger(__name__)

STANDARD_SKILLS = ("listening", "reading", "writing", "speaking")


def aggregate_skills(skills: Iterable[SkillScore], policy: Optional[BandPolicy] = None) -> OverallResult:
	"""Aggregate uniform ``{kind, band}`` records.

	Kinds beyond the four standard skills are kept under ``other`` and count
	toward the overall band. If a kind appears twice the later record wins.
	"""
	bands: Dict[str, Optional[float]] = {}
	for skill in skills:
		kind = (skill.kind or "").strip().lower()
		if not kind:
			continue
		bands[kind] = round_band(skill.band, policy)

	present = [b for b in bands.values() if b is not None]
	result = OverallResult(
		**{kind: bands.get(kind) for kind in STANDARD_SKILLS},
		other={k: v for k, v in bands.items() if k not in STANDARD_SKILLS and v is not None},
		overall=mean_band(present, policy),
	)
	logger.debug("aggregated %d of %d skills -> overall %s", len(present), len(bands), result.overall)
	return result


def aggregate(
	listening: Any = None,
	reading: Any = None,
	writing: Any = None,
	speaking: Any = None,
	policy: Optional[BandPolicy] = None,
) -> OverallResult:
	return aggregate_skills(
		[
			SkillScore(kind="listening", band=round_band(listening, policy)),
			SkillScore(kind="reading", band=round_band(reading, policy)),
			SkillScore(kind="writing", band=round_band(writing, policy)),
			SkillScore(kind="speaking", band=round_band(speaking, policy)),
		],
		policy,
	)


def combine_task_bands(task_bands: Iterable[Any], policy: Optional[BandPolicy] = None) -> Optional[float]:
	"""Writing skill band from its task bands (Task 1 and Task 2)."""
	return mean_band(list(task_bands), policy)

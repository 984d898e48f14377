"""
Band Score Engine

Turns raw criterion measurements into half-point bands (0-9), applies the
capping policy, and averages criteria into a composite band.

Rounding follows the official banded convention: a fractional part below .25
rounds down, .25 up to .75 goes to the half band, .75 and above rounds up.
The older nearest-half rule (``floor(x * 2 + 0.5) / 2``, halves rounding up)
still exists as an opt-in policy (``BandPolicy.rounding = "nearest_half"``)
because some historical scores were produced with it. It lands on the same
bands for exact inputs but has no tolerance for float noise in averages.
"""

from __future__ import annotations

import logging
import math
from typing import Any, List, Optional, Sequence, Tuple

from .models import CapContext, Criteria, CriteriaScore
from .settings import BandPolicy


logger = logging.getLogger(__name__)

MIN_BAND = 0.0
MAX_BAND = 9.0

CAP_OFF_TOPIC = "off_topic"
CAP_SHORT_RESPONSE = "insufficient_length"
CAP_DIAGNOSTIC_CEILING = "diagnostic_ceiling"


def as_number(raw: Any) -> Optional[float]:
	if raw is None or isinstance(raw, bool):
		return None
	try:
		x = float(raw)
	except (TypeError, ValueError):
		return None
	if math.isnan(x):
		return None
	return x


def _clamp(x: float) -> float:
	return max(MIN_BAND, min(MAX_BAND, x))


def to_band(raw: Any) -> Optional[float]:
	"""Round a raw score to its band with the official half-band rule.

	>>> to_band(6.2), to_band(6.25), to_band(6.74), to_band(6.75)
	(6.0, 6.5, 6.5, 7.0)
	"""
	x = as_number(raw)
	if x is None:
		return None
	# Averages like 5.249999999 must land on the same side as 5.25
	x = round(_clamp(x), 6)
	floor = math.floor(x)
	frac = x - floor
	if frac < 0.25:
		band = float(floor)
	elif frac < 0.75:
		band = floor + 0.5
	else:
		band = floor + 1.0
	return _clamp(band)


def nearest_half(raw: Any) -> Optional[float]:
	"""Legacy rule ``floor(x * 2 + 0.5) / 2``; exact halves round up.

	A mean such as 5.2499999999 rounds to 5.0 here, where to_band gives 5.5.
	"""
	x = as_number(raw)
	if x is None:
		return None
	return _clamp(math.floor(_clamp(x) * 2 + 0.5) / 2)


def round_band(raw: Any, policy: Optional[BandPolicy] = None) -> Optional[float]:
	policy = policy or BandPolicy()
	if policy.rounding == "nearest_half":
		return nearest_half(raw)
	return to_band(raw)


def mean_band(values: Sequence[Any], policy: Optional[BandPolicy] = None) -> Optional[float]:
	"""Rounded mean over the values that are present; None when there are none."""
	nums = [x for x in (as_number(v) for v in values) if x is not None]
	if not nums:
		return None
	return round_band(sum(nums) / len(nums), policy)


def min_words_for(task_type: Optional[str], policy: Optional[BandPolicy] = None) -> int:
	"""Minimum word count for a writing task: Task 2 asks for 250, anything else for 150."""
	policy = policy or BandPolicy()
	key = (task_type or "").lower().replace(" ", "").replace("_", "")
	if key in ("task2", "t2", "writingt2", "2"):
		return policy.min_words_task2
	return policy.min_words_task1


def is_off_topic(context: CapContext, policy: Optional[BandPolicy] = None) -> bool:
	policy = policy or BandPolicy()
	if context.off_topic:
		return True
	return context.on_topic_percent is not None and context.on_topic_percent <= policy.on_topic_min_percent


def is_diagnostic(context: Optional[CapContext], policy: Optional[BandPolicy] = None) -> bool:
	# The request may opt in or out; otherwise the deployment policy decides
	policy = policy or BandPolicy()
	if context is not None and context.diagnostic is not None:
		return context.diagnostic
	return policy.diagnostic


def caps_for(context: Optional[CapContext], policy: Optional[BandPolicy] = None) -> List[Tuple[str, float]]:
	"""Return the (name, ceiling) caps that apply to a response, in priority order."""
	policy = policy or BandPolicy()
	context = context or CapContext()
	caps: List[Tuple[str, float]] = []
	if is_off_topic(context, policy):
		caps.append((CAP_OFF_TOPIC, policy.off_topic_cap))
	if context.word_count is not None and context.min_words is not None and context.word_count < context.min_words:
		caps.append((CAP_SHORT_RESPONSE, policy.short_response_cap))
	if is_diagnostic(context, policy):
		caps.append((CAP_DIAGNOSTIC_CEILING, policy.ceiling))
	return caps


def apply_caps(band: Any, context: Optional[CapContext], policy: Optional[BandPolicy] = None) -> Optional[float]:
	"""Lower a band to every cap the context triggers. Caps never raise a band."""
	value = as_number(band)
	if value is None:
		return None
	for _name, ceiling in caps_for(context, policy):
		value = min(value, ceiling)
	return value


def score_criteria(
	criteria: Criteria,
	context: Optional[CapContext] = None,
	policy: Optional[BandPolicy] = None,
) -> CriteriaScore:
	"""Band each present criterion and combine them into a capped composite.

	Args:
		criteria: Writing (TR/CC/LR/GRA) or speaking (FC/LR/GRA/P) raw scores;
			missing criteria are None and are left out of the mean
		context: Off-topic, length and diagnostic signals for the cap policy
		policy: Rounding and cap values

	Returns:
		CriteriaScore with the composite band (None if no criterion is present),
		the rounded criteria, and the names of the caps that lowered the overall.
	"""
	policy = policy or BandPolicy()
	rounded = {name: round_band(value, policy) for name, value in criteria}
	present = [v for v in rounded.values() if v is not None]
	overall = round_band(sum(present) / len(present), policy) if present else None

	caps_applied: List[str] = []
	if overall is not None:
		for name, ceiling in caps_for(context, policy):
			if overall > ceiling:
				caps_applied.append(name)
			overall = min(overall, ceiling)

	if is_diagnostic(context, policy):
		rounded = {name: (min(v, policy.ceiling) if v is not None else None) for name, v in rounded.items()}

	if overall is None:
		logger.debug("no criterion present in %s; overall left empty", type(criteria).__name__)
	return CriteriaScore(
		overall=overall,
		criteria=criteria.model_copy(update=rounded),
		caps_applied=caps_applied,
	)

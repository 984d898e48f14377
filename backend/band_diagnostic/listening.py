"""
Listening raw-score mapping and error review for the fixed diagnostic item set.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError

from .bands import as_number
from .models import ListeningItem, ListeningReview
from .settings import BandPolicy


logger = logging.getLogger(__name__)

# Upper raw score of each bucket -> band
LISTENING_BUCKETS = [
	(1, 4.5),
	(3, 5.5),
	(5, 6.5),
]

# Strategy tips keyed by item tag
TAG_TIPS: Dict[str, str] = {
	"inference": "Listen for implied conclusions; confirm with a second clue.",
	"numbers": "Write numbers as heard; double-check units (kg, km).",
	"paraphrase": "Expect synonyms: map “purchase”↔“buy”, “assist”↔“help”.",
	"detail": "Focus on stated specifics; avoid assumptions.",
	"main-idea": "Catch topic sentences & conclusions for gist.",
}


def listening_band(raw: Any, policy: Optional[BandPolicy] = None) -> Optional[float]:
	"""Map the count of correct answers on the 6-item diagnostic set to a band.

	Args:
		raw: Correct answers (0-6)
		policy: ``diagnostic`` keeps the perfect-score bucket at the ceiling;
			otherwise it maps to ``listening_top_band``

	Returns:
		Band, or None when no raw score was supplied
	"""
	policy = policy or BandPolicy()
	score = as_number(raw)
	if score is None:
		return None
	for upper, band in LISTENING_BUCKETS:
		if score <= upper:
			return band
	if policy.diagnostic:
		return policy.ceiling
	return policy.listening_top_band


def _tip_for(tag: str) -> str:
	return TAG_TIPS.get(tag, f"Practice {tag} question types more often.")


def review_listening(wrong_ids: Optional[Iterable[str]], items: Optional[Iterable[Any]]) -> ListeningReview:
	"""Explain wrong answers and suggest strategies for the two weakest tags."""
	by_id: Dict[str, ListeningItem] = {}
	for raw in items or []:
		try:
			item = raw if isinstance(raw, ListeningItem) else ListeningItem.model_validate(raw)
		except ValidationError:
			logger.debug("skipping malformed listening item: %r", raw)
			continue
		by_id[item.id] = item

	wrong: List[ListeningItem] = []
	tags: Counter = Counter()
	for item_id in wrong_ids or []:
		item = by_id.get(item_id)
		if item is None:
			logger.debug("wrong answer for unknown listening item %s", item_id)
			continue
		wrong.append(item)
		tags.update(item.tags)

	return ListeningReview(
		wrong=wrong,
		synonyms_suggested=[_tip_for(tag) for tag, _count in tags.most_common(2)],
	)

"""
Prosodic Feature Extractor

Derives fluency metrics (speaking rate, pauses, filler density, articulation
rate) from a normalized transcript and the recognizer's time-aligned segments.
Segments are optional; without timing the speech duration is estimated from
the word count under a baseline speaking rate.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Iterable, List, Optional, Tuple

from pydantic import ValidationError

from .models import AudioFeatures, Segment
from .settings import ProsodyConfig
from .transcript import count_words, filler_pattern


logger = logging.getLogger(__name__)

_SENTENCE_TERMINATORS = re.compile(r"[.!?]+")


def coerce_segments(segments: Optional[Iterable[Any]]) -> List[Segment]:
	"""Accept Segment models or recognizer dicts; drop entries that are unusable."""
	out: List[Segment] = []
	for raw in segments or []:
		if isinstance(raw, Segment):
			out.append(raw)
			continue
		try:
			out.append(Segment.model_validate(raw))
		except ValidationError:
			logger.debug("skipping malformed segment: %r", raw)
	return out


def count_sentences(text: str) -> int:
	return len([s for s in _SENTENCE_TERMINATORS.split(text or "") if s.strip()])


def estimate_duration(word_count: int, segments: List[Segment], config: ProsodyConfig) -> float:
	if segments:
		return max(0.0, segments[-1].end - segments[0].start)
	if word_count <= 0:
		return 0.0
	return max(word_count / config.baseline_words_per_second, config.min_estimated_duration)


def detect_pauses(segments: List[Segment], config: ProsodyConfig) -> Tuple[int, int, List[float]]:
	"""Return (pause_count, long_pause_count, pause gaps) over adjacent segment pairs."""
	pauses = 0
	long_pauses = 0
	gaps: List[float] = []
	for prev, curr in zip(segments, segments[1:]):
		gap = max(0.0, curr.start - prev.end)
		if gap > config.pause_threshold:
			pauses += 1
			gaps.append(gap)
			if gap >= config.long_pause_threshold:
				long_pauses += 1
	return pauses, long_pauses, gaps


def extract_features(
	normalized_text: Optional[str],
	segments: Optional[Iterable[Any]] = None,
	config: Optional[ProsodyConfig] = None,
) -> AudioFeatures:
	"""Compute fluency features for one spoken response.

	Args:
		normalized_text: Transcript text after normalization
		segments: Chronological recognizer segments, possibly empty
		config: Pause thresholds and rate assumptions

	Returns:
		AudioFeatures; empty input gives all-zero features. Never raises.
	"""
	config = config or ProsodyConfig()
	text = normalized_text if isinstance(normalized_text, str) else ""
	segs = coerce_segments(segments)

	word_count = count_words(text)
	sentence_count = count_sentences(text)
	duration = estimate_duration(word_count, segs, config)
	pause_count, long_pause_count, gaps = detect_pauses(segs, config)
	mean_pause = sum(gaps) / len(gaps) if gaps else 0.0

	# Residual fillers after normalization, not the raw count
	filler_count = len(filler_pattern(config.transcript).findall(text))

	wpm = word_count / duration * 60 if duration > 0 else 0.0
	filler_per_100 = filler_count / word_count * 100 if word_count else 0.0
	articulation = word_count * config.syllables_per_word / duration if duration > 0 else 0.0

	features = AudioFeatures(
		wpm=round(wpm, 1),
		filler_per_100=round(filler_per_100, 2),
		pause_count=pause_count,
		long_pause_count=long_pause_count,
		mean_pause_duration=round(mean_pause, 2),
		speech_duration=round(duration, 2),
		articulation_rate=round(articulation, 2),
		word_count=word_count,
		sentence_count=sentence_count,
	)
	logger.debug("audio features: %s", features.model_dump(by_alias=True))
	return features

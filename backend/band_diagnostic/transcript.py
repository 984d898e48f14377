"""
Transcript Normalizer
=====================

Cleans raw speech-recognition output before it is measured or scored.

Stages, in order:
1. Whitespace compaction
2. Sentence segmentation
3. Duplicate / near-duplicate collapsing (re-recognized sentences, stuttered phrases)
4. Filler collapsing ("um um um" -> "um")
5. Capitalization and punctuation spacing repair

Fillers reported on the result are taken from the raw text so the count reflects
what was actually said, while the returned text is the cleaned version.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import List, Optional, Pattern

from .models import NormalizedTranscript
from .settings import TranscriptConfig


logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")
_SENTENCE_BREAK = re.compile(r"(?<=[.!?])\s+")
# Alphanumeric runs with internal apostrophes ("don't", "students'" -> "students")
WORD_PATTERN = re.compile(r"[A-Za-z0-9]+(?:'[A-Za-z0-9]+)*")

# Single words that are correctly doubled in English ("I had had enough")
_GRAMMATICAL_DOUBLES = ("had", "that", "is")

# Longest first so a repeated three-word phrase is not eaten as single words
_REPEATED_PHRASES = [
	re.compile(r"\b(\w+\s+\w+\s+\w+)(?:\s+\1\b)+", re.IGNORECASE),
	re.compile(r"\b(\w+\s+\w+)(?:\s+\1\b)+", re.IGNORECASE),
	re.compile(r"\b(?!(?:" + "|".join(_GRAMMATICAL_DOUBLES) + r")\b)(\w+)(?:\s+\1\b)+", re.IGNORECASE),
]

# What may sit between two repetitions of a filler and still count as a run
_LIGHT_SEPARATOR = re.compile(r"[\s,.\-]{0,3}")

_NEAR_DUPLICATE_RATIO = 1.5


# ============================================================================
# FILLER MATCHING
# ============================================================================

def _elongated(word: str) -> str:
	return "".join(re.escape(ch) + "+" for ch in word)


@lru_cache(maxsize=16)
def filler_pattern(config: TranscriptConfig) -> Pattern[str]:
	"""Compile the whole-word filler matcher for a config (cached per config)."""
	alternatives = [_elongated(w.lower()) for w in config.interjections]
	alternatives += [r"\s+".join(re.escape(part) for part in phrase.lower().split()) for phrase in config.filler_phrases]
	if not alternatives:
		return re.compile(r"(?!)")
	alternatives.sort(key=len, reverse=True)
	return re.compile(r"\b(?:" + "|".join(alternatives) + r")\b", re.IGNORECASE)


def _filler_key(match_text: str) -> str:
	# "Ummm" and "um" are the same filler
	squeezed = re.sub(r"(.)\1+", r"\1", match_text.lower())
	return _WHITESPACE.sub(" ", squeezed)


def extract_fillers(text: str, config: Optional[TranscriptConfig] = None) -> List[str]:
	if not text:
		return []
	pattern = filler_pattern(config or TranscriptConfig())
	return [m.group(0).lower() for m in pattern.finditer(text)]


# ============================================================================
# PIPELINE STAGES
# ============================================================================

def compact_whitespace(text: str) -> str:
	return _WHITESPACE.sub(" ", text or "").strip()


def split_sentences(text: str) -> List[str]:
	return [s.strip() for s in _SENTENCE_BREAK.split(text) if s.strip()]


def _comparison_key(sentence: str) -> str:
	# Terminal punctuation differs between re-recognitions of one utterance
	return sentence.lower().strip().rstrip(".!?").rstrip()


def _contains_words(longer: str, shorter: str, prefix: bool = False) -> bool:
	# Whole-word match only: "no" must not match inside "nobody"
	anchor = "^" if prefix else r"(?<!\w)"
	return re.search(anchor + re.escape(shorter) + r"(?!\w)", longer) is not None


def _same_utterance(kept: str, new: str) -> bool:
	shorter, longer = (kept, new) if len(kept) <= len(new) else (new, kept)
	if _contains_words(longer, shorter, prefix=True):
		return True
	return _contains_words(longer, shorter) and len(longer) < len(shorter) * _NEAR_DUPLICATE_RATIO


def collapse_duplicate_sentences(sentences: List[str]) -> List[str]:
	"""Drop sentences the recognizer emitted twice.

	Each sentence is compared (case-insensitively, ignoring terminal
	punctuation) with the last *kept* sentence only. An exact repeat is
	dropped; a whole-word prefix or a close whole-word containment is treated
	as the same utterance recognized twice and the longer rendering wins.

	Args:
		sentences: Sentences in spoken order

	Returns:
		Sentences with re-recognized duplicates removed, order preserved
	"""
	kept: List[str] = []
	for sentence in sentences:
		norm = _comparison_key(sentence)
		if not norm:
			continue
		if not kept:
			kept.append(sentence)
			continue
		last = _comparison_key(kept[-1])
		if norm == last:
			continue
		if _same_utterance(last, norm):
			if len(norm) > len(last):
				kept[-1] = sentence
			continue
		kept.append(sentence)
	return kept


def collapse_repeated_phrases(text: str) -> str:
	"""Collapse stuttered 1-3 word phrases ("I think I think that" -> "I think that")."""
	s = text
	for pattern in _REPEATED_PHRASES:
		s = pattern.sub(r"\1", s)
	return compact_whitespace(s)


def collapse_fillers(text: str, config: Optional[TranscriptConfig] = None) -> str:
	"""Reduce runs of the same filler to its first occurrence.

	Repetitions may be separated by whitespace, commas, periods or hyphens (up
	to three characters). Different fillers next to each other are left alone.
	"""
	if not text:
		return ""
	pattern = filler_pattern(config or TranscriptConfig())
	pieces: List[str] = []
	cursor = 0
	run_start = run_end = -1
	run_key = run_text = ""
	for match in pattern.finditer(text):
		key = _filler_key(match.group(0))
		if run_start >= 0 and key == run_key and _LIGHT_SEPARATOR.fullmatch(text, run_end, match.start()):
			run_end = match.end()
			continue
		if run_start >= 0:
			pieces.append(text[cursor:run_start] + run_text)
			cursor = run_end
		run_start, run_end, run_key, run_text = match.start(), match.end(), key, match.group(0)
	if run_start >= 0:
		pieces.append(text[cursor:run_start] + run_text)
		cursor = run_end
	pieces.append(text[cursor:])
	return compact_whitespace("".join(pieces))


def fix_capitalization(text: str) -> str:
	if not text:
		return ""
	result = text.strip()
	result = re.sub(r"\s+([,.!?;:])", r"\1", result)
	result = re.sub(r"([.!?])\s+", r"\1 ", result)
	# "works.Then" -> "works. Then"; leaves "U.S.A" alone
	result = re.sub(r"(?<=[a-z][a-z])([.!?])(?=[A-Z])", r"\1 ", result)
	result = re.sub(r"^([^A-Za-z]*)([a-z])", lambda m: m.group(1) + m.group(2).upper(), result)
	result = re.sub(r"([.!?]\s+)([a-z])", lambda m: m.group(1) + m.group(2).upper(), result)
	# Leaves "i.e." alone
	result = re.sub(r"\bi\b(?!\.\w)", "I", result)
	return result.strip()


def count_words(text: str) -> int:
	return len(WORD_PATTERN.findall(text or ""))


# ============================================================================
# ENTRY POINT
# ============================================================================

def normalize(raw: Optional[str], config: Optional[TranscriptConfig] = None) -> NormalizedTranscript:
	"""Clean a raw recognizer transcript.

	Args:
		raw: Unprocessed recognizer output; may be empty or None
		config: Filler list and stage switches; defaults apply when omitted

	Returns:
		NormalizedTranscript. Empty or whitespace-only input yields the
		zero-value record. Never raises.
	"""
	if not isinstance(raw, str) or not raw.strip():
		return NormalizedTranscript()
	config = config or TranscriptConfig()

	filler_words = extract_fillers(raw, config)

	compact = compact_whitespace(raw)
	sentences = collapse_duplicate_sentences(split_sentences(compact))
	processed = " ".join(sentences)
	if config.collapse_repeated_phrases:
		processed = collapse_repeated_phrases(processed)
	processed = collapse_fillers(processed, config)
	processed = fix_capitalization(processed)

	result = NormalizedTranscript(
		text=processed,
		sentences=split_sentences(processed),
		word_count=count_words(processed),
		filler_words=filler_words,
		filler_count=len(filler_words),
	)
	logger.debug(
		"normalized transcript: %d raw chars -> %d words, %d fillers",
		len(raw), result.word_count, result.filler_count,
	)
	return result

"""
Transcript normalizer unit tests

Checks:
- empty input degrades to the zero-value record
- re-recognized sentences and stuttered phrases collapse
- filler runs collapse while the reported fillers reflect the raw text
- capitalization and punctuation spacing repair
"""

from __future__ import annotations

import pytest

from band_diagnostic.models import NormalizedTranscript
from band_diagnostic.settings import TranscriptConfig
from band_diagnostic.transcript import (
	collapse_duplicate_sentences,
	collapse_fillers,
	extract_fillers,
	fix_capitalization,
	normalize,
)


# =========================================================================
# Empty input
# =========================================================================

class TestEmptyInput:
	@pytest.mark.parametrize("raw", ["", "   ", "\n\t ", None])
	def test_zero_value_record(self, raw):
		assert normalize(raw) == NormalizedTranscript()

	def test_non_string_does_not_raise(self):
		assert normalize(12345).word_count == 0


# =========================================================================
# Duplicate collapsing
# =========================================================================

class TestDuplicates:
	def test_stuttered_phrase_collapses(self):
		result = normalize("I think I think that the plan works.")
		assert result.text == "I think that the plan works."
		assert result.word_count == 6

	def test_exact_repeat_dropped(self):
		result = normalize("I went to the store. I went to the store. Then I came home.")
		assert result.sentences == ["I went to the store.", "Then I came home."]

	def test_repeat_is_case_insensitive(self):
		assert collapse_duplicate_sentences(["It was fun.", "it was FUN."]) == ["It was fun."]

	def test_prefix_keeps_longer(self):
		kept = collapse_duplicate_sentences(["The weather is nice today.", "The weather is nice today and warm."])
		assert kept == ["The weather is nice today and warm."]

	def test_shorter_rerecognition_dropped(self):
		kept = collapse_duplicate_sentences(["The weather is nice today and warm.", "The weather is nice."])
		assert kept == ["The weather is nice today and warm."]

	def test_close_containment_keeps_longer(self):
		kept = collapse_duplicate_sentences(["We visited the old museum.", "Then we visited the old museum."])
		assert kept == ["Then we visited the old museum."]

	def test_loose_containment_is_distinct(self):
		kept = collapse_duplicate_sentences(["I agree.", "Well, honestly I agree with that completely."])
		assert len(kept) == 2

	def test_short_answer_before_longer_word_kept(self):
		assert collapse_duplicate_sentences(["No.", "Nobody knows why."]) == ["No.", "Nobody knows why."]
		result = normalize("Yes. Yesterday I went to the park.")
		assert result.text == "Yes. Yesterday I went to the park."
		assert result.word_count == 7

	def test_containment_needs_whole_words(self):
		kept = collapse_duplicate_sentences(["The art show.", "The art shower was broken."])
		assert len(kept) == 2

	def test_prefix_differing_only_in_punctuation(self):
		assert collapse_duplicate_sentences(["Really?", "Really, it was great."]) == ["Really, it was great."]

	def test_grammatical_doubles_kept(self):
		result = normalize("By then I had had enough.")
		assert result.text == "By then I had had enough."
		assert result.word_count == 6
		assert normalize("The problem is is that it rains.").text == "The problem is is that it rains."

	def test_only_previous_sentence_compared(self):
		kept = collapse_duplicate_sentences(["Cats are good.", "Dogs are loud.", "Cats are good."])
		assert kept == ["Cats are good.", "Dogs are loud.", "Cats are good."]

	def test_phrase_collapse_can_be_disabled(self):
		config = TranscriptConfig(collapse_repeated_phrases=False)
		result = normalize("I think I think that the plan works.", config)
		assert result.text == "I think I think that the plan works."


# =========================================================================
# Fillers
# =========================================================================

class TestFillers:
	def test_filler_run_collapses(self):
		result = normalize("um um um so basically basically it works")
		assert result.text == "Um so basically it works"
		assert result.text.lower().split().count("um") == 1

	def test_reported_fillers_come_from_raw_text(self):
		result = normalize("um um um so basically basically it works")
		assert result.filler_words == ["um", "um", "um"]
		assert result.filler_count == 3

	def test_filler_count_matches_list(self):
		result = normalize("Well, uh, you know, I mean it was like fine.")
		assert result.filler_count == len(result.filler_words)
		assert result.filler_words == ["uh", "you know", "i mean", "like"]

	def test_run_with_light_punctuation(self):
		assert collapse_fillers("So, um, um, I think.") == "So, um, I think."

	def test_distinct_fillers_not_merged(self):
		assert collapse_fillers("um uh okay") == "um uh okay"

	def test_elongated_spellings_are_one_filler(self):
		assert collapse_fillers("ummm, um let's go") == "ummm let's go"
		assert extract_fillers("Ummm, hmmm, uhh") == ["ummm", "hmmm", "uhh"]

	def test_phrase_filler_run(self):
		assert collapse_fillers("you know, you know, it's fine") == "you know, it's fine"

	def test_filler_inside_word_ignored(self):
		assert extract_fillers("The umbrella was likeable") == []

	def test_custom_filler_list(self):
		config = TranscriptConfig(interjections=("eh",), filler_phrases=("sort of",))
		assert extract_fillers("eh, it was sort of um fine", config) == ["eh", "sort of"]


# =========================================================================
# Capitalization / punctuation
# =========================================================================

class TestCapitalization:
	def test_sentence_starts_and_pronoun(self):
		assert fix_capitalization("hello world. i think so. it works") == "Hello world. I think so. It works"

	def test_space_before_punctuation_removed(self):
		assert fix_capitalization("yes , i agree .") == "Yes, I agree."

	def test_missing_space_after_sentence_end(self):
		assert fix_capitalization("it works.Then we left") == "It works. Then we left"

	def test_id_est_not_capitalized(self):
		assert fix_capitalization("we use tools, i.e., hammers and i like them") == "We use tools, i.e., hammers and I like them"
		assert fix_capitalization("so do i.") == "So do I."

	def test_abbreviation_untouched(self):
		assert fix_capitalization("we went to the U.S.A last year") == "We went to the U.S.A last year"

	def test_full_pipeline_sentences(self):
		result = normalize("hello world.   i think so .  it works")
		assert result.text == "Hello world. I think so. It works"
		assert result.sentences == ["Hello world.", "I think so.", "It works"]
		assert result.word_count == 7

	def test_apostrophe_words_count_once(self):
		assert normalize("i don't know what i'm doing").word_count == 6

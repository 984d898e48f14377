from __future__ import annotations
from typing import Dict, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Segment(BaseModel):
	"""Time-aligned chunk of recognizer output, times in seconds."""
	model_config = ConfigDict(allow_inf_nan=False)

	start: float
	end: float
	text: str = ""


class NormalizedTranscript(BaseModel):
	text: str = ""
	sentences: List[str] = Field(default_factory=list)
	word_count: int = 0
	# Fillers as spoken, taken from the raw text before any collapsing
	filler_words: List[str] = Field(default_factory=list)
	filler_count: int = 0


class AudioFeatures(BaseModel):
	"""Fluency metrics handed to the criterion scorer.

	Dumped with camelCase aliases (``fillerPer100``, ``longPauseCount`` ...),
	the shape the scoring prompt was written against.
	"""
	model_config = ConfigDict(populate_by_name=True)

	wpm: float = 0.0
	filler_per_100: float = Field(default=0.0, alias="fillerPer100")
	pause_count: int = Field(default=0, alias="pauseCount")
	long_pause_count: int = Field(default=0, alias="longPauseCount")
	mean_pause_duration: float = Field(default=0.0, alias="meanPauseDuration")
	speech_duration: float = Field(default=0.0, alias="speechDuration")
	articulation_rate: float = Field(default=0.0, alias="articulationRate")
	word_count: int = Field(default=0, alias="wordCount")
	sentence_count: int = Field(default=0, alias="sentenceCount")


class _CriteriaBase(BaseModel):
	# Keeps writing and speaking criteria from validating as each other
	model_config = ConfigDict(extra="forbid")

	def present(self) -> Dict[str, float]:
		return {name: value for name, value in self if value is not None}


class CriterionBands(_CriteriaBase):
	"""Writing criteria: Task Response, Coherence & Cohesion, Lexical Resource, Grammar."""
	TR: Optional[float] = Field(default=None, validation_alias=AliasChoices("TR", "tr"))
	CC: Optional[float] = Field(default=None, validation_alias=AliasChoices("CC", "cc"))
	LR: Optional[float] = Field(default=None, validation_alias=AliasChoices("LR", "lr"))
	GRA: Optional[float] = Field(default=None, validation_alias=AliasChoices("GRA", "gra"))


class SpeakingCriterionBands(_CriteriaBase):
	"""Speaking criteria: Fluency & Coherence, Lexical Resource, Grammar, Pronunciation."""
	FC: Optional[float] = Field(default=None, validation_alias=AliasChoices("FC", "fluency_coherence"))
	LR: Optional[float] = Field(default=None, validation_alias=AliasChoices("LR", "lexical_resource"))
	GRA: Optional[float] = Field(default=None, validation_alias=AliasChoices("GRA", "grammatical_range"))
	P: Optional[float] = Field(default=None, validation_alias=AliasChoices("P", "pronunciation"))


Criteria = Union[CriterionBands, SpeakingCriterionBands]


class CapContext(BaseModel):
	"""What the cap policy needs to know about a scored response."""
	off_topic: bool = False
	on_topic_percent: Optional[float] = None
	word_count: Optional[int] = None
	min_words: Optional[int] = None
	# None defers to BandPolicy.diagnostic
	diagnostic: Optional[bool] = None


class CriteriaScore(BaseModel):
	overall: Optional[float] = None
	criteria: Criteria
	caps_applied: List[str] = Field(default_factory=list)


class SkillScore(BaseModel):
	kind: str
	band: Optional[float] = None


class OverallResult(BaseModel):
	listening: Optional[float] = None
	reading: Optional[float] = None
	writing: Optional[float] = None
	speaking: Optional[float] = None
	# Bands for skill kinds beyond the four standard ones
	other: Dict[str, float] = Field(default_factory=dict)
	overall: Optional[float] = None


class ListeningItem(BaseModel):
	id: str
	explanation: str = ""
	paraphrases: List[str] = Field(default_factory=list)
	tags: List[str] = Field(default_factory=list)


class ListeningReview(BaseModel):
	wrong: List[ListeningItem] = Field(default_factory=list)
	synonyms_suggested: List[str] = Field(default_factory=list)

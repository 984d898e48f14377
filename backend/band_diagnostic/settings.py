from __future__ import annotations
from typing import Literal, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TranscriptConfig(BaseModel):
	"""Knobs for the transcript normalizer."""
	model_config = ConfigDict(frozen=True)

	# Interjections match with every letter elongated (um -> ummm, hmm -> hmmmm)
	interjections: Tuple[str, ...] = ("um", "uh", "er", "ah", "hmm")
	filler_phrases: Tuple[str, ...] = ("you know", "like", "i mean")
	# Collapse immediately repeated 1-3 word phrases ("I think I think")
	collapse_repeated_phrases: bool = True


class ProsodyConfig(BaseModel):
	"""Thresholds used when deriving fluency features from timed segments."""
	model_config = ConfigDict(frozen=True)

	pause_threshold: float = 0.2
	long_pause_threshold: float = 0.8
	# Assumed speaking rate when the recognizer gave no timing
	baseline_words_per_second: float = 2.8
	min_estimated_duration: float = 1.0
	syllables_per_word: float = 1.4
	transcript: TranscriptConfig = Field(default_factory=TranscriptConfig)


class BandPolicy(BaseModel):
	"""Rounding and capping policy for band scores."""
	model_config = ConfigDict(frozen=True)

	# "ielts" is the official convention; "nearest_half" is the legacy round(x*2)/2
	rounding: Literal["ielts", "nearest_half"] = "ielts"
	# Free/trial diagnostic flow: caps every band at `ceiling`
	diagnostic: bool = True
	ceiling: float = 6.5
	off_topic_cap: float = 3.0
	short_response_cap: float = 5.0
	on_topic_min_percent: float = 50.0
	min_words_task1: int = 150
	min_words_task2: int = 250
	# Top listening bucket when the diagnostic ceiling is off
	listening_top_band: float = 7.5


class Settings(BaseSettings):
	# Logging
	log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
	# "text" or "json"
	log_format: str = Field(default="text", validation_alias="LOG_FORMAT")

	# Band policy
	diagnostic_mode: bool = Field(default=True, validation_alias="DIAGNOSTIC_MODE")
	band_ceiling: float = Field(default=6.5, validation_alias="BAND_CEILING")
	off_topic_cap: float = Field(default=3.0, validation_alias="OFF_TOPIC_CAP")
	short_response_cap: float = Field(default=5.0, validation_alias="SHORT_RESPONSE_CAP")
	on_topic_min_percent: float = Field(default=50.0, validation_alias="ON_TOPIC_MIN_PERCENT")
	min_words_task1: int = Field(default=150, validation_alias="MIN_WORDS_TASK1")
	min_words_task2: int = Field(default=250, validation_alias="MIN_WORDS_TASK2")
	listening_top_band: float = Field(default=7.5, validation_alias="LISTENING_TOP_BAND")
	band_rounding: Literal["ielts", "nearest_half"] = Field(default="ielts", validation_alias="BAND_ROUNDING")

	# Prosody
	pause_threshold_seconds: float = Field(default=0.2, validation_alias="PAUSE_THRESHOLD_SECONDS")
	long_pause_threshold_seconds: float = Field(default=0.8, validation_alias="LONG_PAUSE_THRESHOLD_SECONDS")
	baseline_words_per_second: float = Field(default=2.8, validation_alias="BASELINE_WORDS_PER_SECOND")
	syllables_per_word: float = Field(default=1.4, validation_alias="SYLLABLES_PER_WORD")

	# Transcript cleanup
	collapse_repeated_phrases: bool = Field(default=True, validation_alias="COLLAPSE_REPEATED_PHRASES")

	# pydantic-settings v2 style config
	model_config = SettingsConfigDict(env_file=".env", extra="ignore")

	def transcript_config(self) -> TranscriptConfig:
		return TranscriptConfig(collapse_repeated_phrases=self.collapse_repeated_phrases)

	def prosody_config(self) -> ProsodyConfig:
		return ProsodyConfig(
			pause_threshold=self.pause_threshold_seconds,
			long_pause_threshold=self.long_pause_threshold_seconds,
			baseline_words_per_second=self.baseline_words_per_second,
			syllables_per_word=self.syllables_per_word,
			transcript=self.transcript_config(),
		)

	def band_policy(self) -> BandPolicy:
		return BandPolicy(
			rounding=self.band_rounding,
			diagnostic=self.diagnostic_mode,
			ceiling=self.band_ceiling,
			off_topic_cap=self.off_topic_cap,
			short_response_cap=self.short_response_cap,
			on_topic_min_percent=self.on_topic_min_percent,
			min_words_task1=self.min_words_task1,
			min_words_task2=self.min_words_task2,
			listening_top_band=self.listening_top_band,
		)


settings = Settings()

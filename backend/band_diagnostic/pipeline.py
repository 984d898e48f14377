from __future__ import annotations
from typing import Any, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field

from .models import AudioFeatures, NormalizedTranscript
from .prosody import extract_features
from .settings import ProsodyConfig
from .transcript import normalize


class SpeechAnalysis(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	transcript: NormalizedTranscript
	audio_features: AudioFeatures = Field(alias="audioFeatures")


def process_speech(
	raw: Optional[str],
	segments: Optional[Iterable[Any]] = None,
	config: Optional[ProsodyConfig] = None,
) -> SpeechAnalysis:
	# Normalize first; features are measured on the cleaned text
	config = config or ProsodyConfig()
	transcript = normalize(raw, config.transcript)
	features = extract_features(transcript.text, segments, config)
	return SpeechAnalysis(transcript=transcript, audio_features=features)

"""
Cross-section aggregation tests
"""

from __future__ import annotations

from band_diagnostic.aggregate import aggregate, aggregate_skills, combine_task_bands
from band_diagnostic.models import SkillScore
from band_diagnostic.settings import BandPolicy


class TestAggregate:
	def test_two_skills_averaged_over_present_only(self):
		result = aggregate(listening=6.5, writing=7.0)
		assert result.overall == 7.0
		assert result.reading is None
		assert result.speaking is None

	def test_all_four(self):
		result = aggregate(listening=6.5, reading=6.5, writing=5.0, speaking=6.0)
		assert result.overall == 6.0

	def test_nothing_attempted(self):
		result = aggregate()
		assert result.overall is None
		assert result.other == {}

	def test_skill_bands_are_rounded(self):
		result = aggregate(listening=6.3, speaking=5.8)
		assert (result.listening, result.speaking) == (6.5, 6.0)

	def test_legacy_rounding_policy(self):
		policy = BandPolicy(rounding="nearest_half")
		# Exact quarter means round up under both rules
		assert aggregate(listening=6.0, writing=6.5, policy=policy).overall == 6.5
		assert aggregate(listening=6.0, writing=6.5).overall == 6.5
		assert aggregate(listening=6.3, reading=5.7, policy=policy).listening == 6.5


class TestAggregateSkills:
	def test_extra_kinds_count_toward_overall(self):
		skills = [SkillScore(kind="Writing", band=6.0), SkillScore(kind="vocabulary", band=7.0)]
		result = aggregate_skills(skills)
		assert result.writing == 6.0
		assert result.other == {"vocabulary": 7.0}
		assert result.overall == 6.5

	def test_later_record_wins(self):
		skills = [SkillScore(kind="reading", band=5.0), SkillScore(kind="reading", band=7.0)]
		assert aggregate_skills(skills).reading == 7.0

	def test_missing_band_not_counted(self):
		skills = [SkillScore(kind="speaking"), SkillScore(kind="listening", band=5.5), SkillScore(kind="", band=9.0)]
		result = aggregate_skills(skills)
		assert result.overall == 5.5
		assert result.other == {}


class TestCombineTaskBands:
	def test_mean_of_submitted_tasks(self):
		assert combine_task_bands([6.0, None, 6.5]) == 6.5
		assert combine_task_bands([5.0, 6.0]) == 5.5

	def test_no_tasks(self):
		assert combine_task_bands([]) is None

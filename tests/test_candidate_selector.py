"""
Tests for matching/candidate_selector.py - registry criteria.
"""

import pytest

from dpelink.matching.candidate_selector import build_candidate_criteria, square_footage_band
from dpelink.models import EnergyClass


class TestSquareFootageBand:
    def test_default_tolerance_is_ten_percent(self):
        minimum, maximum = square_footage_band(50)
        assert minimum == pytest.approx(45)
        assert maximum == pytest.approx(55)

    def test_custom_tolerance(self):
        minimum, maximum = square_footage_band(100, 0.2)
        assert minimum == pytest.approx(80)
        assert maximum == pytest.approx(120)

    def test_zero_tolerance(self):
        assert square_footage_band(60, 0) == (60, 60)


class TestBuildCandidateCriteria:
    def test_criteria_from_query(self, paris_query):
        criteria = build_candidate_criteria(paris_query, tolerance=0.1, limit=20)
        assert criteria.zip_code == "75001"
        assert criteria.energy_class is EnergyClass.F
        assert criteria.square_footage_min == pytest.approx(45)
        assert criteria.square_footage_max == pytest.approx(55)
        assert criteria.limit == 20

    def test_default_limit(self, paris_query):
        assert build_candidate_criteria(paris_query).limit == 50

"""Tests for lifeos/gamification/scoring.py

Level math is derived from XP and never stored, so these tests pin the
boundaries: empty XP, just below a level, exactly on a level, and
several levels in.
"""

import pytest

from lifeos.gamification.scoring import LevelInfo, award_many, award_xp, kpi_progress, level_of
from lifeos.models import KPI, Pillar, default_pillars


# ─────────────────────────────────────────────────────────────────────────────
# Level Tests
# ─────────────────────────────────────────────────────────────────────────────


class TestLevelOf:
    """Tests for XP -> level conversion."""

    @pytest.mark.parametrize("xp", [None, 0])
    def test_empty_xp_is_level_zero(self, xp):
        """Absent or zero XP should be level 0 with no progress."""
        assert level_of(xp) == LevelInfo(level=0, current_xp=0, next_level_xp=100)

    def test_negative_xp_treated_as_zero(self):
        """Negative XP should not produce a negative level."""
        assert level_of(-40) == LevelInfo(level=0, current_xp=0, next_level_xp=100)

    def test_just_below_first_level(self):
        info = level_of(99)
        assert (info.level, info.current_xp, info.next_level_xp) == (0, 99, 100)

    def test_exactly_on_level_boundary(self):
        """100 XP should be level 1 with an empty progress bar."""
        info = level_of(100)
        assert (info.level, info.current_xp) == (1, 0)
        assert info.progress_percent == 0

    def test_several_levels_in(self):
        info = level_of(250)
        assert (info.level, info.current_xp, info.next_level_xp) == (2, 50, 100)
        assert info.progress_percent == 50

    def test_custom_level_width(self):
        """Level width should come from configuration when given."""
        info = level_of(250, level_width=200)
        assert (info.level, info.current_xp, info.next_level_xp) == (1, 50, 200)

    def test_to_dict(self):
        assert level_of(130).to_dict() == {"level": 1, "current_xp": 30, "next_level_xp": 100}


# ─────────────────────────────────────────────────────────────────────────────
# Award Tests
# ─────────────────────────────────────────────────────────────────────────────


class TestAwards:
    """Tests for XP awards on the pillar map."""

    def test_award_returns_copy(self):
        """Awarding XP should not mutate the input map."""
        pillars = default_pillars()
        updated = award_xp(pillars, Pillar.BODY, 15)

        assert updated[Pillar.BODY] == 15
        assert pillars[Pillar.BODY] == 0

    def test_award_initializes_missing_pillar(self):
        updated = award_xp({}, Pillar.MIND, 10)
        assert updated == {Pillar.MIND: 10}

    def test_award_many_sums_per_pillar(self):
        pillars = {**default_pillars(), Pillar.CAREER: 40}
        updated = award_many(pillars, {Pillar.CAREER: 10, Pillar.FINANCE: 5})

        assert updated[Pillar.CAREER] == 50
        assert updated[Pillar.FINANCE] == 5
        assert updated[Pillar.BODY] == 0

    def test_negative_award_rejected(self):
        """Pillar XP only grows; a negative award is a caller bug."""
        with pytest.raises(ValueError):
            award_xp({Pillar.BODY: 50}, Pillar.BODY, -30)

    def test_negative_award_many_rejected(self):
        pillars = {Pillar.CAREER: 40}
        with pytest.raises(ValueError):
            award_many(pillars, {Pillar.CAREER: 10, Pillar.FINANCE: -5})
        assert pillars == {Pillar.CAREER: 40}



# ─────────────────────────────────────────────────────────────────────────────
# KPI Tests
# ─────────────────────────────────────────────────────────────────────────────


class TestKpiProgress:
    """Tests for KPI percent progress."""

    def test_halfway(self):
        assert kpi_progress(KPI(name="Weight", start=90, current=85, target=80)) == 50

    def test_clamped_above_100(self):
        assert kpi_progress(KPI(name="Books", start=0, current=30, target=20)) == 100

    def test_clamped_below_0(self):
        """Moving away from the target should read as no progress."""
        assert kpi_progress(KPI(name="Savings", start=1000, current=800, target=2000)) == 0

    def test_start_equals_target(self):
        """A degenerate KPI should not divide by zero."""
        assert kpi_progress(KPI(name="Flat", start=10, current=5, target=10)) == 0
        assert kpi_progress(KPI(name="Flat", start=10, current=10, target=10)) == 100

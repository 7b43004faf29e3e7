"""Tests for hotspot aggregation and tiers."""

import pytest

from git_scanline.analyzers.models import (
    BugData,
    BurstData,
    ChurnData,
    CommitQualityData,
    CouplingEntry,
    RevertData,
    SiloData,
)
from git_scanline.exceptions import InvalidConfigError
from git_scanline.history import DiffStats
from git_scanline.scoring import Tier, Weights, get_tier, score_hotspots


def _score_single(
    churn=0.0, bugs=0.0, reverts=0.0, bursts=0.0, coupling=0.0, silo=0.0, quality=0.0, weights=None
):
    """Score one file whose signals are set directly."""
    f = "a.py"
    couplings = [CouplingEntry("a.py", "b.py", 3, coupling)] if coupling else []
    [result] = score_hotspots(
        [f],
        {f: ChurnData(1, 0.0, churn)},
        {f: BugData(0, bugs)},
        {f: RevertData(0, reverts)},
        {f: BurstData(0, bursts)},
        couplings,
        {f: SiloData("alice@x.com", silo, 1)},
        {f: CommitQualityData(0, 0, quality)},
        weights=weights,
    )
    return result


class TestGetTier:
    """Tests for tier boundaries."""

    @pytest.mark.parametrize(
        "score, tier",
        [
            (100.0, Tier.CRITICAL),
            (75.0, Tier.CRITICAL),
            (74.99, Tier.HIGH),
            (50.0, Tier.HIGH),
            (49.99, Tier.MEDIUM),
            (25.0, Tier.MEDIUM),
            (24.99, Tier.LOW),
            (0.0, Tier.LOW),
        ],
    )
    def test_boundaries(self, score, tier):
        assert get_tier(score) == tier


class TestWeights:
    """Tests for weight handling."""

    def test_defaults_sum_to_one(self):
        assert Weights().total() == pytest.approx(1.0)

    def test_normalized_keeps_ratios(self):
        normalized = Weights(churn=2, bugs=2, reverts=1, bursts=1, coupling=1, silo=1, commit_quality=2).normalized()
        assert normalized.total() == pytest.approx(1.0)
        assert normalized.churn == pytest.approx(0.2)
        assert normalized.silo == pytest.approx(0.1)

    def test_zero_weight_rejected(self):
        with pytest.raises(InvalidConfigError, match="weights.silo"):
            Weights(silo=0).validate()

    def test_non_finite_weight_rejected(self):
        with pytest.raises(InvalidConfigError):
            Weights(churn=float("nan")).validate()


class TestScoreHotspots:
    """Tests for score_hotspots."""

    def test_all_zero_is_low(self):
        result = _score_single()
        assert result.hotspot_score == 0.0
        assert result.tier == Tier.LOW

    def test_all_hundred_is_critical(self):
        result = _score_single(100, 100, 100, 100, 100, 100, 100)
        assert result.hotspot_score > 75.0
        assert result.hotspot_score == pytest.approx(100.0)
        assert result.tier == Tier.CRITICAL

    def test_churn_only_matches_weight(self):
        result = _score_single(churn=100.0)
        assert result.hotspot_score == pytest.approx(100.0 * Weights().normalized().churn)

    def test_custom_weights_normalized(self):
        weights = Weights(churn=3, bugs=1, reverts=1, bursts=1, coupling=1, silo=1, commit_quality=2)
        result = _score_single(churn=100.0, weights=weights)
        assert result.hotspot_score == pytest.approx(30.0)

    def test_silo_uses_top_author_share(self):
        result = _score_single(silo=80.0)
        assert result.silo_score == 80.0
        assert result.hotspot_score == pytest.approx(80.0 * Weights().normalized().silo)

    def test_coupling_from_strongest_pair(self):
        result = _score_single(coupling=60.0)
        assert result.coupling_score == 60.0

    def test_out_of_range_signal_clipped(self):
        result = _score_single(churn=250.0, bugs=-10.0)
        assert result.churn_score == 100.0
        assert result.bug_fix_score == 0.0

    def test_missing_signals_are_neutral(self):
        [result] = score_hotspots(["new.py"], {}, {}, {}, {}, [], {}, {})
        assert result.hotspot_score == 0.0
        assert result.tier == Tier.LOW
        assert result.details.top_author == "unknown"
        assert result.details.commit_count == 0

    def test_one_result_per_file_in_input_order(self):
        files = ["b.py", "a.py", "c.py"]
        results = score_hotspots(files, {}, {}, {}, {}, [], {}, {})
        assert [r.file for r in results] == files

    def test_diff_stats_carried_into_details(self):
        [result] = score_hotspots(
            ["a.py"], {}, {}, {}, {}, [], {}, {}, diff_stats={"a.py": DiffStats(12, 4)}
        )
        assert (result.details.additions, result.details.deletions) == (12, 4)

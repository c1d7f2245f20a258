"""Tests for payout statistics."""

from random import Random

import pytest

from plinko.geometry import BoardGeometry
from plinko.slots import REFERENCE_TABLE, SUPPORTED_ROWS, RiskLevel, SlotTable, slot_table_for
from plinko.statistics import (
    binomial_slot_probabilities,
    payout_profile,
    simulate_landings,
    theoretical_rtp,
)


class TestTheoreticalRTP:
    """Tests for binomial RTP calculations."""

    @pytest.mark.parametrize("rows", [1, 8, 12, 16])
    def test_probabilities_sum_to_one(self, rows):
        probs = binomial_slot_probabilities(rows)
        assert len(probs) == rows + 1
        assert sum(probs) == pytest.approx(1.0)

    def test_centre_slot_most_likely(self):
        probs = binomial_slot_probabilities(16)
        assert max(probs) == probs[8]

    def test_reference_rtp(self):
        """The reference table returns just under 99%."""
        assert theoretical_rtp(REFERENCE_TABLE) == pytest.approx(0.98988, abs=1e-4)

    @pytest.mark.parametrize("rows", SUPPORTED_ROWS)
    @pytest.mark.parametrize("risk", list(RiskLevel))
    def test_every_table_favours_the_house(self, rows, risk):
        rtp = theoretical_rtp(slot_table_for(rows, risk))
        assert 0.98 < rtp < 1.0

    def test_flat_table(self):
        assert theoretical_rtp(SlotTable((1.0,) * 9)) == pytest.approx(1.0)


class TestPayoutProfile:
    """Tests for payout_profile."""

    def test_house_edge(self):
        profile = payout_profile(REFERENCE_TABLE)
        assert profile.house_edge == pytest.approx(1.0 - profile.rtp)

    def test_hit_rate(self):
        """Only slots paying more than 1x count as hits."""
        profile = payout_profile(REFERENCE_TABLE)
        assert profile.hit_rate == pytest.approx(2 * 6885 / 65536)


class TestMonteCarlo:
    """Tests for simulate_landings."""

    def test_counts_every_drop(self):
        report = simulate_landings(200, BoardGeometry(), REFERENCE_TABLE, rng=Random(1))
        assert report.drops == 200
        assert sum(report.slot_counts) == 200
        assert len(report.slot_counts) == 17
        assert sum(report.slot_frequencies) == pytest.approx(1.0)
        assert report.rtp > 0

    def test_zero_drops(self):
        report = simulate_landings(0, BoardGeometry(), REFERENCE_TABLE)
        assert report.rtp == 0.0
        assert report.slot_frequencies == (0.0,) * 17

    def test_negative_drops(self):
        with pytest.raises(ValueError):
            simulate_landings(-1, BoardGeometry(), REFERENCE_TABLE)

    def test_seeded_runs_match(self):
        a = simulate_landings(50, BoardGeometry(), REFERENCE_TABLE, rng=Random(3))
        b = simulate_landings(50, BoardGeometry(), REFERENCE_TABLE, rng=Random(3))
        assert a.slot_counts == b.slot_counts

"""Unit tests for the TDS applicability decision.

Covers the decision order:
1. Non-deductor client (always wins)
2. Explicit override
3. Single payment threshold
4. FY cumulative threshold
5. Below threshold
"""

import pytest

from payoutcalc.sdk.taxes import calc_tds, check_tds_applicability


class TestDeductorCheck:
    """Non-deductor clients never withhold TDS."""

    @pytest.mark.parametrize("amount", [1000, 30000.01, 50000, 10_000_000])
    def test_non_deductor_never_applicable(self, amount):
        result = check_tds_applicability(amount, 0, client_is_tds_deductor=False)

        assert result.tds_applicable is False
        assert result.tds_reason == "client_not_tds_deductor"

    def test_non_deductor_beats_cumulative(self):
        result = check_tds_applicability(10000, 500000, client_is_tds_deductor=False)

        assert result.tds_applicable is False
        assert result.tds_reason == "client_not_tds_deductor"

    def test_non_deductor_beats_override(self):
        result = check_tds_applicability(
            50000, 0, client_is_tds_deductor=False, force_applicable=True
        )

        assert result.tds_applicable is False
        assert result.tds_reason == "client_not_tds_deductor"


class TestOverride:
    """Explicit override is honoured for deductor clients."""

    def test_force_true_below_threshold(self):
        result = check_tds_applicability(1000, 0, True, force_applicable=True)

        assert result.tds_applicable is True
        assert result.tds_reason == "single_payment_exceeds_threshold"

    def test_force_false_above_threshold(self):
        result = check_tds_applicability(100000, 0, True, force_applicable=False)

        assert result.tds_applicable is False
        assert result.tds_reason == "below_threshold"


class TestThresholds:
    """Threshold checks (strictly greater than ₹30,000)."""

    def test_single_payment_above_threshold(self):
        result = check_tds_applicability(30000.01, 0, True)

        assert result.tds_applicable is True
        assert result.tds_reason == "single_payment_exceeds_threshold"

    def test_single_payment_at_threshold_not_applicable(self):
        result = check_tds_applicability(30000, 0, True)

        assert result.tds_applicable is False
        assert result.tds_reason == "below_threshold"

    def test_cumulative_crosses_threshold(self):
        result = check_tds_applicability(10000, 25000, True)

        assert result.tds_applicable is True
        assert result.tds_reason == "cumulative_exceeds_threshold"

    def test_cumulative_exactly_at_threshold(self):
        result = check_tds_applicability(10000, 20000, True)

        assert result.tds_applicable is False
        assert result.tds_reason == "below_threshold"

    def test_single_payment_takes_priority_over_cumulative(self):
        """When both would fire, the reason is the single payment check."""
        result = check_tds_applicability(40000, 40000, True)

        assert result.tds_reason == "single_payment_exceeds_threshold"


class TestCalcTds:
    """Tests for calc_tds()."""

    def test_ten_percent(self):
        assert calc_tds(50000) == 5000.0

    def test_rounded_to_paise(self):
        assert calc_tds(33333.33) == 3333.33

"""Unit tests for freelancer payout and client payable breakdowns.

Reference scenario (₹50,000 contract, GST registered freelancer):

    Freelancer: 50,000 + 9,000 GST = 59,000 gross
                - 2,500 fee - 450 fee GST - 500 TCS - 5,000 TDS = 50,550 net
    Client:     59,000 + 1,500 fee + 270 fee GST = 60,770 payable
"""

import math

import pytest
from pydantic import ValidationError

from payoutcalc.sdk.money import round_to_two
from payoutcalc.sdk.schemas import PayoutBreakdown
from payoutcalc.sdk.taxes import calculate_client_payable, calculate_freelancer_payout


class TestFreelancerPayout:
    """Tests for calculate_freelancer_payout()."""

    def test_gst_registered_with_forced_tds(self):
        payout = calculate_freelancer_payout(
            50000, True, client_is_tds_deductor=True, force_tds_applicable=True
        )

        assert payout.contract_value == 50000
        assert payout.service_gst == 9000
        assert payout.gross_amount == 59000
        assert payout.platform_fee == 2500
        assert payout.platform_fee_gst == 450
        assert payout.tcs == 500
        assert payout.tds == 5000
        assert payout.tds_applicable is True
        assert payout.tds_reason == "single_payment_exceeds_threshold"
        assert payout.net_payout == 50550

    def test_non_deductor_client_skips_tds(self):
        payout = calculate_freelancer_payout(50000, True, client_is_tds_deductor=False)

        assert payout.tds is None
        assert payout.tds_applicable is False
        assert payout.tds_reason == "client_not_tds_deductor"
        assert payout.net_payout == 55550

    def test_not_gst_registered(self):
        payout = calculate_freelancer_payout(25000, False, client_is_tds_deductor=True)

        assert payout.service_gst is None
        assert payout.gross_amount == 25000
        assert payout.platform_fee == 1250
        assert payout.platform_fee_gst == 225
        assert payout.tcs == 250
        assert payout.tds is None
        assert payout.tds_reason == "below_threshold"
        assert payout.net_payout == 23275

    def test_cumulative_amount_triggers_tds(self):
        payout = calculate_freelancer_payout(
            25000, False, client_is_tds_deductor=True, cumulative_amount=10000
        )

        assert payout.tds_applicable is True
        assert payout.tds_reason == "cumulative_exceeds_threshold"
        assert payout.tds == 2500
        assert payout.net_payout == 20775

    def test_tcs_applies_without_gst_or_tds(self):
        payout = calculate_freelancer_payout(10000, False, client_is_tds_deductor=False)

        assert payout.tcs == 100

    def test_deductor_flag_is_required(self):
        with pytest.raises(TypeError):
            calculate_freelancer_payout(50000, True)

    def test_total_deductions(self):
        payout = calculate_freelancer_payout(
            50000, True, client_is_tds_deductor=True, force_tds_applicable=True
        )
        assert payout.total_deductions == 8450

    def test_nan_contract_value_propagates(self):
        payout = calculate_freelancer_payout(float("nan"), True, client_is_tds_deductor=True)
        assert math.isnan(payout.net_payout)
        assert payout.tds_reason == "below_threshold"

    def test_infinite_contract_value_does_not_raise(self):
        payout = calculate_freelancer_payout(float("inf"), False, client_is_tds_deductor=False)
        assert payout.gross_amount == float("inf")


class TestPayoutConservation:
    """net + fee + fee GST + TCS + TDS == gross, to the paisa."""

    @pytest.mark.parametrize("contract_value", [
        1, 999.99, 12345.67, 29999.99, 30000, 30000.01, 50000, 77777.77, 123456.78, 1000000.01,
    ])
    @pytest.mark.parametrize("gst_registered", [True, False])
    @pytest.mark.parametrize("deductor", [True, False])
    def test_conservation(self, contract_value, gst_registered, deductor):
        p = calculate_freelancer_payout(
            contract_value, gst_registered, client_is_tds_deductor=deductor
        )

        reconstructed = round_to_two(
            p.net_payout + p.platform_fee + p.platform_fee_gst + p.tcs + (p.tds or 0)
        )
        assert reconstructed == p.gross_amount
        assert p.gross_amount == round_to_two(contract_value + (p.service_gst or 0))


class TestClientPayable:
    """Tests for calculate_client_payable()."""

    def test_gst_registered_with_forced_tds(self):
        payable = calculate_client_payable(
            50000, True, client_is_tds_deductor=True, force_tds_applicable=True
        )

        assert payable.service_value == 50000
        assert payable.service_gst == 9000
        assert payable.total_service_amount == 59000
        assert payable.platform_fee == 1500
        assert payable.platform_fee_gst == 270
        assert payable.tds_held == 5000
        assert payable.tds_applicable is True
        assert payable.total_payable == 60770

    def test_tds_not_added_to_total(self):
        with_tds = calculate_client_payable(
            50000, True, client_is_tds_deductor=True, force_tds_applicable=True
        )
        without_tds = calculate_client_payable(50000, True, client_is_tds_deductor=False)

        assert without_tds.tds_held is None
        assert with_tds.total_payable == without_tds.total_payable

    def test_not_gst_registered(self):
        payable = calculate_client_payable(20000, False, client_is_tds_deductor=True)

        assert payable.service_gst is None
        assert payable.total_service_amount == 20000
        assert payable.total_payable == 20708

    def test_payable_ignores_cumulative_history(self):
        """The client view always checks TDS against a cumulative of 0.

        So the two views can disagree for the same contract when the pair
        already has payments this FY.
        """
        payout = calculate_freelancer_payout(
            25000, False, client_is_tds_deductor=True, cumulative_amount=10000
        )
        payable = calculate_client_payable(25000, False, client_is_tds_deductor=True)

        assert payout.tds_applicable is True
        assert payable.tds_applicable is False


class TestBreakdownCoherence:
    """Schema validators reject breakdowns that don't add up."""

    def test_inconsistent_net_rejected(self):
        with pytest.raises(ValidationError, match="net_payout"):
            PayoutBreakdown(
                contract_value=50000,
                service_gst=None,
                gross_amount=50000,
                platform_fee=2500,
                platform_fee_gst=450,
                tcs=500,
                tds=None,
                tds_applicable=False,
                tds_reason="below_threshold",
                net_payout=50000,
            )

    def test_breakdown_is_frozen(self):
        payout = calculate_freelancer_payout(50000, True, client_is_tds_deductor=False)
        with pytest.raises(ValidationError):
            payout.net_payout = 1

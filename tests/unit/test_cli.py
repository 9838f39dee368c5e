"""Tests for the payout-calc CLI commands.

Runs commands through click's CliRunner against isolated config and data
directories.
"""

import json

import pytest
import yaml
from click.testing import CliRunner

from payoutcalc.cli.__main__ import cli


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Set up isolated config and data directories."""
    config_dir = tmp_path / "config"
    data_dir = tmp_path / "data"
    config_dir.mkdir()
    data_dir.mkdir()

    monkeypatch.setenv("PAYOUT_CALC_CONFIG_PATH", str(config_dir))
    (config_dir / "settings.json").write_text(json.dumps({"data_dir": str(data_dir)}))

    return {"config_dir": config_dir, "data_dir": data_dir}


def write_financial_profile(config_dir, **financial):
    (config_dir / "profile.yaml").write_text(yaml.dump({"financial": financial}))


def invoke(*args):
    return CliRunner().invoke(cli, list(args))


class TestPayoutCommand:
    """payout-calc payout"""

    def test_json_output(self, isolated_env):
        result = invoke("payout", "50000", "--gst", "--deductor", "--force-tds", "--json")

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["net_payout"] == 50550
        assert data["tds"] == 5000
        assert data["tds_reason"] == "single_payment_exceeds_threshold"

    def test_text_output(self, isolated_env):
        result = invoke("payout", "50000", "--gst", "--non-deductor")

        assert result.exit_code == 0, result.output
        assert "Net Payout" in result.output
        assert "₹55,550.00" in result.output
        assert "client is not a TDS deductor" in result.output

    def test_requires_deductor_flag(self, isolated_env):
        result = invoke("payout", "50000", "--gst")

        assert result.exit_code != 0
        assert "--deductor or --non-deductor" in result.output

    def test_gst_flag_from_profile(self, isolated_env):
        write_financial_profile(isolated_env["config_dir"], is_gst_registered=True)

        result = invoke("payout", "50000", "--non-deductor", "--json")

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["service_gst"] == 9000

    def test_cumulative_option(self, isolated_env):
        result = invoke("payout", "25000", "--no-gst", "--deductor",
                        "--cumulative", "10000", "--json")

        assert json.loads(result.output)["tds_reason"] == "cumulative_exceeds_threshold"

    def test_ledger_lookup(self, isolated_env):
        invoke("ledger", "add", "c1", "f1", "25000", "--date", "2025-05-01")

        result = invoke("payout", "10000", "--no-gst", "--deductor",
                        "--client", "c1", "--freelancer", "f1", "--fy", "2025-2026", "--json")

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["tds_reason"] == "cumulative_exceeds_threshold"

    def test_cumulative_and_ledger_conflict(self, isolated_env):
        result = invoke("payout", "10000", "--no-gst", "--deductor",
                        "--cumulative", "5", "--client", "c1", "--freelancer", "f1")

        assert result.exit_code != 0
        assert "not both" in result.output


class TestPayableCommand:
    """payout-calc payable"""

    def test_json_output(self, isolated_env):
        result = invoke("payable", "50000", "--gst", "--deductor", "--force-tds", "--json")

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["total_payable"] == 60770
        assert data["tds_held"] == 5000

    def test_deductor_flag_from_profile(self, isolated_env):
        write_financial_profile(isolated_env["config_dir"], is_tds_deductor=False)

        result = invoke("payable", "50000", "--no-gst", "--json")

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["tds_applicable"] is False


class TestMilestonesCommand:
    """payout-calc milestones"""

    def test_explicit_phases(self, isolated_env):
        result = invoke("milestones", "100000", "-p", "A", "-p", "B", "-p", "C",
                        "--no-gst", "--deductor", "--json")

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert [m["amount"] for m in data] == [33333.33, 33333.33, 33333.34]
        assert [m["status"] for m in data] == ["pending"] * 3

    def test_category_lookup(self, isolated_env):
        result = invoke("milestones", "50000", "-c", "Content Writing",
                        "--no-gst", "--deductor", "--json")

        assert result.exit_code == 0, result.output
        assert [m["phase_name"] for m in json.loads(result.output)] == [
            "Outline", "First Draft", "Final Draft"
        ]

    def test_needs_phases_or_category(self, isolated_env):
        result = invoke("milestones", "50000", "--no-gst", "--deductor")

        assert result.exit_code != 0
        assert "Known categories" in result.output

    def test_text_output(self, isolated_env):
        result = invoke("milestones", "60000", "-c", "default", "--no-gst", "--deductor")

        assert result.exit_code == 0, result.output
        assert "Phase-wise Payout (4 phases)" in result.output


class TestFyCommand:
    """payout-calc fy"""

    def test_json(self, isolated_env):
        result = invoke("fy", "--date", "2025-05-10", "--json")

        assert json.loads(result.output) == {
            "date": "2025-05-10",
            "financial_year": "2025-2026",
            "quarter_end": "2025-06-30",
            "fd_maturity": "2025-08-06",
        }


class TestValidateCommands:
    """payout-calc validate ..."""

    def test_valid_pan(self, isolated_env):
        result = invoke("validate", "pan", "abcde1234f")

        assert result.exit_code == 0
        assert "PAN ABCDE1234F: valid" in result.output

    def test_invalid_pan_exit_code(self, isolated_env):
        result = invoke("validate", "pan", "ABCDQ1234F")

        assert result.exit_code == 1
        assert "Invalid PAN holder type character" in result.output

    def test_gstin_with_pan_mismatch(self, isolated_env):
        result = invoke("validate", "gstin", "27ABCDE1234F1Z5", "--pan", "ABCPE5678K")

        assert result.exit_code == 1
        assert "Maharashtra" in result.output
        assert "does not match" in result.output

    def test_profile(self, isolated_env):
        write_financial_profile(
            isolated_env["config_dir"],
            pan_number="ABCDE1234F", is_gst_registered=True,
        )

        result = invoke("validate", "profile")

        assert result.exit_code == 1
        assert "gstin_number: GSTIN is required for GST registered users" in result.output

    def test_profile_missing(self, isolated_env):
        result = invoke("validate", "profile")

        assert result.exit_code != 0
        assert "No profile found" in result.output

    def test_bid(self, isolated_env):
        result = invoke("validate", "bid", "70000", "--budget", "100000")

        assert result.exit_code == 1
        assert "Minimum bid is ₹80,000.00" in result.output


class TestLedgerCommands:
    """payout-calc ledger ..."""

    def test_add_and_show_pair(self, isolated_env):
        invoke("ledger", "add", "c1", "f1", "20000", "--date", "2025-06-01")
        invoke("ledger", "add", "c1", "f1", "15000", "--date", "2025-09-01")

        result = invoke("ledger", "show", "c1", "f1", "--fy", "2025-2026")

        assert result.exit_code == 0, result.output
        assert "₹35,000.00" in result.output
        assert "crossed" in result.output

    def test_show_empty(self, isolated_env):
        result = invoke("ledger", "show", "--fy", "2025-2026")
        assert "No payments recorded for FY 2025-2026." in result.output

    def test_rejects_non_positive_amount(self, isolated_env):
        result = invoke("ledger", "add", "c1", "f1", "0")
        assert result.exit_code != 0


class TestProfileCommands:
    """payout-calc profile ..."""

    def test_set_then_show(self, isolated_env):
        result = invoke("profile", "set", "--pan", "abcde1234f",
                        "--gstin", "27ABCDE1234F1Z5", "--gst", "--deductor")
        assert result.exit_code == 0, result.output

        saved = yaml.safe_load((isolated_env["config_dir"] / "profile.yaml").read_text())
        assert saved["financial"]["pan_number"] == "ABCDE1234F"

        result = invoke("profile", "show")
        assert "Ready: profile is complete" in result.output
        assert "TDS deductor:   yes" in result.output

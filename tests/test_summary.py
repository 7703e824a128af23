"""Tests for the summary command."""

import pytest

from budgetline.cli.main import cli


@pytest.fixture
def sample_ledgers(budget_service, expense_service, sample_reference_data):
    marketing = sample_reference_data["Marketing"]
    budget_service.add_entry("Ads", "1000", 2024, 1, "OPEX", business_line_id=marketing)
    budget_service.add_entry("Servers", "4000", 2024, 2, "CAPEX")
    expense_service.add_entry("Ads", "1250", 2024, 1, "OPEX", business_line_id=marketing)


def test_summary_empty(cli_runner, temp_db):
    """Test summary with no entries."""
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "summary"])

    assert result.exit_code == 0
    assert "No entries found." in result.output


def test_summary_by_business_line(cli_runner, temp_db, sample_ledgers):
    """Default grouping is by business line with totals per type."""
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "summary"])

    assert result.exit_code == 0
    assert "Budget vs expense by business line" in result.output
    assert "Marketing" in result.output
    assert "Unassigned" in result.output
    assert "-$250.00" in result.output
    assert "Budget totals: CAPEX $4,000.00, OPEX $1,000.00" in result.output
    assert "Expense totals: CAPEX $0.00, OPEX $1,250.00" in result.output


def test_summary_by_month_filtered(cli_runner, temp_db, sample_ledgers):
    """Filters and month grouping."""
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "summary", "--group-by", "month", "--type", "capex"],
    )

    assert result.exit_code == 0
    assert "2024-02" in result.output
    assert "2024-01" not in result.output


def test_summary_trend(cli_runner, temp_db, sample_ledgers):
    """--trend shows monthly budget per business line."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "summary", "--trend", "--type", "OPEX"]
    )

    assert result.exit_code == 0
    assert "Budget trend" in result.output
    assert "2024-01" in result.output
    assert "$1,000.00" in result.output

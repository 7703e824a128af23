"""Tests for the export command."""

import csv
import io

from budgetline.cli.main import cli
from budgetline.domain.ledger import EXPORT_COLUMNS


def test_export_to_stdout(cli_runner, temp_db, expense_service, sample_reference_data):
    """Exported CSV has the import column names."""
    expense_service.add_entry(
        "Laptops", "2400", 2024, 5, "CAPEX", business_line_id=sample_reference_data["Sales"]
    )

    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "export", "expense"])

    assert result.exit_code == 0
    rows = list(csv.DictReader(io.StringIO(result.output)))
    assert len(rows) == 1
    assert tuple(rows[0]) == EXPORT_COLUMNS
    assert rows[0]["Description"] == "Laptops"
    assert rows[0]["Amount"] == "2400.00"
    assert rows[0]["Business Line"] == "Sales"
    assert rows[0]["Source"] == "Expense"


def test_export_to_file_reimports(cli_runner, temp_db, budget_service, tmp_path):
    """An exported file can be imported again."""
    budget_service.add_entry("Rent", "1200", 2024, 1, "OPEX")
    output = tmp_path / "budgets.csv"

    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "export", "budget", "--output", str(output)]
    )
    assert result.exit_code == 0
    assert "Exported 1 budget entries" in result.output

    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "import", str(output)])
    assert result.exit_code == 0
    assert "Successfully imported 1 budget entries and 0 expense entries" in result.output

"""Shared pytest fixtures for budgetline tests."""

import io
import logging
import os
import tempfile

import openpyxl
import pytest

from budgetline.config import ImportLimits
from budgetline.database.factories import create_sqlite_database
from budgetline.domain.business_line import BusinessLineService
from budgetline.domain.cost_center import CostCenterService
from budgetline.domain.entities import LedgerSource
from budgetline.domain.ledger import LedgerService
from budgetline.domain.spreadsheet_import import SpreadsheetImportService
from budgetline.domain.summary import SummaryService

IMPORT_HEADER = ["Description", "Amount", "Year", "Month", "Type", "Business Line", "Cost Center", "Source"]


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers the CLI installs so they do not outlive the runner's streams."""
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def business_line_service(temp_db):
    """Create a BusinessLineService with a temporary database."""
    return BusinessLineService(temp_db)


@pytest.fixture
def cost_center_service(temp_db):
    """Create a CostCenterService with a temporary database."""
    return CostCenterService(temp_db)


@pytest.fixture
def budget_service(temp_db):
    """Create a LedgerService for budgets."""
    return LedgerService(temp_db, LedgerSource.BUDGET)


@pytest.fixture
def expense_service(temp_db):
    """Create a LedgerService for expenses."""
    return LedgerService(temp_db, LedgerSource.EXPENSE)


@pytest.fixture
def summary_service(temp_db):
    """Create a SummaryService with a temporary database."""
    return SummaryService(temp_db)


@pytest.fixture
def import_service(temp_db):
    """Create a SpreadsheetImportService with default limits."""
    return SpreadsheetImportService(temp_db, limits=ImportLimits())


@pytest.fixture
def sample_reference_data(business_line_service, cost_center_service):
    """Create business lines and cost centers with associations.

    Associations:
        R&D -> Marketing
        Field Ops -> Sales, Marketing
        Facilities -> (none)
    """
    ids = {
        "Marketing": business_line_service.create_business_line("Marketing"),
        "Sales": business_line_service.create_business_line("Sales"),
        "R&D": cost_center_service.create_cost_center("R&D"),
        "Field Ops": cost_center_service.create_cost_center("Field Ops"),
        "Facilities": cost_center_service.create_cost_center("Facilities"),
    }
    cost_center_service.associate(ids["R&D"], ids["Marketing"])
    cost_center_service.associate(ids["Field Ops"], ids["Sales"])
    cost_center_service.associate(ids["Field Ops"], ids["Marketing"])
    return ids


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


def _csv_bytes(*lines: str) -> bytes:
    return ("\n".join(lines) + "\n").encode("utf-8")


def _xlsx_bytes(rows, header=IMPORT_HEADER) -> bytes:
    workbook = openpyxl.Workbook()
    sheet = workbook.active
    sheet.title = "Import"
    if header is not None:
        sheet.append(header)
    for row in rows:
        sheet.append(list(row))
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def make_csv():
    """Return a helper that joins CSV lines into an uploaded payload."""
    return _csv_bytes


@pytest.fixture
def make_xlsx():
    """Return a helper that builds an in-memory workbook.

    The helper takes data rows and an optional header (None for no header).
    """
    return _xlsx_bytes

"""Command-line interface for budgetline."""

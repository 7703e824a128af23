"""budgetline - budget and expense tracking by business line and cost center."""

__version__ = "0.1.0"


# Import main lazily so library users do not pull in click
def __getattr__(name):
    if name == "main":
        from budgetline.cli.main import main

        return main
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")

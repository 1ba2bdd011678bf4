"""Campus meal-card ledger."""

__version__ = "0.1.0"

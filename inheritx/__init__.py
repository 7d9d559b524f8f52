"""Flask and SQLite backend for notifications, activities, claims, KYC and withdrawals."""

__version__ = "0.1.0"
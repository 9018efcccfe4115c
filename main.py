"""Cloud Function Entry Point - Root Module.

This is the root-level entry point for Google Cloud Functions.
It imports from the quakereport package.
"""

from quakereport.main import earthquake_report

__all__ = [
    "earthquake_report",
]

"""Command-line tooling for dashboard-composer."""

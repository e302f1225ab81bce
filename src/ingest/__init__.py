"""Legacy export ingestion.

This module reads the ClickUp CSV exports, normalizes raw fields, and
drives the migration pipeline that feeds the store layer.
"""

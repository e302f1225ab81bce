"""Target document storage layer.

This module reads and writes the dashboard's JSON documents, merges new
records append-only, and snapshots documents before the first write.
"""

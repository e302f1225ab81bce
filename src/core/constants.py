"""Core constants used across migration modules.

This module centralizes file names, source locations, and defaults.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_DATA_ROOT = Path("data")
DEFAULT_INBOX_DIR = Path("~/Documents/inbox/to-delete/ClickUp")
BACKUPS_DIR_NAME = "backups"
BACKUP_TIMESTAMP_FORMAT = "%Y-%m-%dT%H-%M-%S"

SOURCE_INCOME = "income"
SOURCE_A2P = "a2p"
SOURCE_TASKS = "tasks"
SOURCE_SUBSCRIPTIONS = "subscriptions"
SOURCE_CREDIT_CARDS = "credit_cards"
SOURCE_RELATIVE_PATHS = {
    SOURCE_INCOME: Path("1. Time Tracking - Income") / "Time_Tracking_Income.csv",
    SOURCE_A2P: Path("2. A2P") / "A2P_List.csv",
    SOURCE_TASKS: Path("3. Tasks Dump") / "Tasks_Dump.csv",
    SOURCE_SUBSCRIPTIONS: Path("CC Dues - Subscriptions - Routines") / "Subscriptions.csv",
    SOURCE_CREDIT_CARDS: Path("CC Dues - Subscriptions - Routines") / "CC_Due.csv",
}
READ_CHECKED_SOURCES = (SOURCE_SUBSCRIPTIONS, SOURCE_CREDIT_CARDS)
SOURCES_FILE_VERSION = 1

BILLING_FILE_NAME = "billing.json"
CLIENTS_FILE_NAME = "clients.json"
A2P_FILE_NAME = "a2p.json"
DROPS_FILE_NAME = "drops.json"
BILLING_COLLECTION_KEY = "billingPeriods"
CLIENTS_COLLECTION_KEY = "clients"
A2P_COLLECTION_KEY = "registrations"
DROPS_COLLECTION_KEY = "drops"
LAST_UPDATED_KEY = "lastUpdated"

UNKNOWN_CLIENT_PREFIX = "unknown-"
UNKNOWN_CLIENT_FALLBACK_SLUG = "untitled"
STUB_CLIENT_TAG = "migrated-from-clickup"
STUB_CLIENT_NOTES = "Auto-created during ClickUp migration, needs review"
STUB_REVENUE_MODEL = "hourly"
STUB_HOURLY_RATE = 100
A2P_NOTES_MAX_LENGTH = 500
DROP_SHORT_ID_LENGTH = 8
DROP_TYPE = "task"
TOTAL_MISMATCH_TOLERANCE = 0.005

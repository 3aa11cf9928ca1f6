"""
Restock — Configuration: paths, database, access roles, constants.
"""
import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths — override with RESTOCK_DATA_DIR env var for cloud deployment
# ---------------------------------------------------------------------------
BASE_FOLDER = Path(os.environ.get("RESTOCK_DATA_DIR", str(Path.home() / "Restock")))
EXPORTS_FOLDER = BASE_FOLDER / "exports"
LOGS_FOLDER = BASE_FOLDER / "logs"

# ---------------------------------------------------------------------------
# Relational store
# ---------------------------------------------------------------------------
DATABASE_URL = os.environ.get("DATABASE_URL", f"sqlite:///{BASE_FOLDER / 'restock.db'}")
INVENTORY_TABLE = "inventory_data"
HISTORY_TABLE = "history_data"

# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------
FRONTEND_URL = os.environ.get("FRONTEND_URL", "*")
CORS_ORIGINS = [o.strip() for o in FRONTEND_URL.split(",") if o.strip()]

# ---------------------------------------------------------------------------
# Access roles & the static credential table
# admin sees every market; "<market>_user" accounts are scoped to one market
# ---------------------------------------------------------------------------
ADMIN_ROLE = "admin"
ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = os.environ.get("RESTOCK_ADMIN_PASSWORD", "admin")
MARKET_PASSWORD = os.environ.get("RESTOCK_MARKET_PASSWORD", "password123")
MARKET_USER_SUFFIX = "_user"

# ---------------------------------------------------------------------------
# Dashboard defaults
# ---------------------------------------------------------------------------
DEFAULT_PAGE_SIZE = 10
END_OF_DAY = (23, 59, 59)

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL = os.environ.get("RESTOCK_LOG_LEVEL", "INFO")
LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 3

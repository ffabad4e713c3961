"""
Configuration constants and environment setup.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
DB_PATH = PROJECT_ROOT / "data" / "db" / "getbus-events.db"
BID_REPORT_PATH = Path(
    os.environ.get("BID_REPORT_PATH", str(PROJECT_ROOT / "data" / "post-bid-report.xlsx"))
)

# =============================================================================
# BID REPORT CONFIGURATION
# =============================================================================

BID_REPORT_SHEET = "Post Bid Report"

# =============================================================================
# CALENDAR CONFIGURATION
# =============================================================================

CALENDAR_USER = os.environ.get("CALENDAR_USER", "")
CALENDAR_NAME = os.environ.get("CALENDAR_NAME", "GET Bus")
TIMEZONE = os.environ.get("TIMEZONE", "America/Los_Angeles")

# =============================================================================
# FORM CONFIGURATION
# =============================================================================

# First form response selects the kind of day
CATEGORY_RUN = "Have a run"
CATEGORY_SHOW = "On show"
CATEGORY_DAY_OFF = "Day off!"

DATE_TOMORROW = "Tomorrow"

SHOW_TITLE = "On Show"
DAY_OFF_TITLE = "Day Off"
STRAIGHT_SHOW_HOURS = 8
SPLIT_SHOW_HOURS = 4

# =============================================================================
# EMAIL CONFIGURATION
# =============================================================================

FROM_EMAIL = os.environ.get("FROM_EMAIL", CALENDAR_USER)
ERROR_EMAIL = os.environ.get("ERROR_EMAIL", CALENDAR_USER)

# =============================================================================
# MS GRAPH CREDENTIALS (from environment)
# =============================================================================

GRAPH_TENANT_ID = os.environ.get("MICROSOFT_GRAPH_TENANT_ID", "")
GRAPH_APP_ID = os.environ.get("MICROSOFT_GRAPH_APP_ID", "")
GRAPH_CLIENT_SECRET = os.environ.get("MICROSOFT_GRAPH_CLIENT_SECRET", "")

# =============================================================================
# API CONFIGURATION
# =============================================================================

GETBUS_API_KEY = os.environ.get("GETBUS_API_KEY", "")
API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "8000"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
API_VERSION = "1.0.0"

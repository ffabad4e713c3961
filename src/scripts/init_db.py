#!/usr/bin/env python3
"""Create the getbus-events SQLite3 database with the API request log tables."""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import DB_PATH
from core.database import create_database


if __name__ == "__main__":
    create_database()
    print(f"Database created successfully at: {DB_PATH}")

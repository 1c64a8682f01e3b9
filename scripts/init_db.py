#!/usr/bin/env python3
# =============================================================================
# scripts/init_db.py - Create History Tables
# =============================================================================
# Creates the explanations and followup_questions tables if they are missing.
# The API does the same on startup; use this to prepare a fresh database.
#
# Usage:
#   python scripts/init_db.py
#
# Prerequisites:
#   - PostgreSQL must be running
#   - DATABASE_URL must be set (.env file)
# =============================================================================

import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from sqlalchemy.exc import SQLAlchemyError

from app.config import settings
from core.database import check_connection, init_db


def main():
    """Check the connection, then create tables."""
    print("=" * 60)
    print("Content Simplifier - Database Setup")
    print("=" * 60)
    print(f"Database: {settings.DATABASE_URL.split('@')[-1]}")
    print()

    try:
        check_connection()
        init_db()
    except SQLAlchemyError as e:
        print(f"ERROR: {e}")
        print("Check DATABASE_URL and that PostgreSQL is running")
        sys.exit(1)

    print("Tables ready: explanations, followup_questions")


if __name__ == "__main__":
    main()

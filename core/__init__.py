# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the history store and document handling:
# - models/: Pydantic schemas for requests, responses and history records
# - database.py: SQLAlchemy engine, sessions and table creation
# - tables.py: ORM tables for explanations and follow-up questions
# - services/: Explanation history and uploaded-file processing
#
# Code in this package should NOT import FastAPI routers.
# This keeps the logic testable and reusable.
# =============================================================================

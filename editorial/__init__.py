"""
Editorial content lifecycle and moderation engine.

Posts move through draft/scheduled/published/archived, comments through
pending/approved/spam/trash. Storage and blob storage are reached through
ports; `editorial.adapters` provides SQLite and filesystem implementations.
"""

__version__ = "0.1.0"

"""
sqlite_store.db

Engine lifecycle and statement execution (SQLAlchemy async over aiosqlite).

Responsibilities:
- Provision the database file's directory.
- Own the engine handle and run statements against it.
"""

# Package marker; import from submodules directly.


# --- Module Notes -----------------------------------------------------------
# Nothing in `sqlite_store.schema` depends on this package; DDL text is engine-agnostic.

"""
chatdrive: a small FastAPI service for user accounts, file storage and a chat log.

The HTTP layer lives in ``chatdrive.routes`` and talks to MongoDB (or an
in-memory stand-in for tests and local runs) through ``chatdrive.db``.
"""

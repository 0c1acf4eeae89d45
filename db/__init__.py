"""
db/ - Database Layer
====================
Handles the SQLite connection, schema initialization, and database deletion.
This layer is the lowest in the architecture; only config and the logger sit below it.
"""

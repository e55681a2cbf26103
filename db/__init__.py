"""
db/ - Database Layer
====================
Handles the embedded SQLite connections, schema initialization, and the
classification of engine errors.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""

"""
repositories/ - Data Access Layer
==================================
Each repository encapsulates the SQL for a group of tables.
Repositories receive raw data from the database and return plain values or domain objects.
"""

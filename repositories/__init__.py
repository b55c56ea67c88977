"""
repositories/ - Data Access Layer
==================================
Each repository encapsulates all SQL queries for a specific table.
Repositories receive domain model objects and write them to the database.
"""

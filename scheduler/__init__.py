"""
scheduler/ - Poll Loop
======================
Runs the ingest cycle on a fixed interval. Holds no business logic.
"""

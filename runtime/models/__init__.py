"""
Data models used by the celebrations site.

- record_models: Collection enum, Record type, required event fields
"""

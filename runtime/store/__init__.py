"""
Storage abstractions for the celebrations site.

Includes:
- RecordStore: append-only JSON-array file per collection (contact, event, dashboard)
- filter_exact: case-insensitive exact-match filtering over loaded records
- validation: required-field presence checks for submissions
"""

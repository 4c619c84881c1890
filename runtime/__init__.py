"""
Runtime package for the celebrations site.

This package contains:
- API layer (FastAPI server, page routes, form routes, access log)
- Stores (per-collection JSON files, filtering, required-field checks)
- Models (collection names and the open Record type)
"""

"""
Core application for the severity dashboard backend.

This app contains:
- flat JSON file stores for the weights configuration and the event data,
- the CSV upload endpoint and the retention sweep for old uploads,
- the central JSON error handlers.
"""

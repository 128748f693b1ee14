"""
Desktop client for the severity dashboard.

The Qt window lives in `app`; the pieces it is built from (panel state,
CSV table, charts, HTTP client) are plain Python so they can be used and
tested without a display.
"""

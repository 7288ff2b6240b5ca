"""
Domain services for Studio Tracker.

- periods: calendar range arithmetic
- demands: point totals and execution codes
- analytics: dashboard, history and chart aggregations
- audit: audit log helpers
"""

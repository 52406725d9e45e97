"""Infrastructure layer for files app.

This package contains integrations with external systems:
- S3-compatible storage backend (pre-signed grants, deletion)
- Storage key and content-type helpers

Keep infrastructure concerns separate from business logic.
"""

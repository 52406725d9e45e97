"""Business logic layer for files app.

This package contains all business logic for files:
- Upload grants, finalization, listing, download grants, deletion
- Public share links and collaborator management

All business logic should be implemented here, separate from
models (data layer), infrastructure (external systems) and views.
"""

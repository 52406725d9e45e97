"""Shared API plumbing: error taxonomy, JSON helpers, error middleware."""

"""Business logic for AI-generated summaries."""

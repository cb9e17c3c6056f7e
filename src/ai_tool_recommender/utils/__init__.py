"""Utility modules for the AI tool recommender."""

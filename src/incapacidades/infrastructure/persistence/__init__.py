"""Persistence layer: engine and session management, models, repositories."""

"""Seed data for the in-memory dashboard store."""

from .mock_data import MOCK_ANALYTICS, MOCK_TEAM_MEMBERS, MOCK_THREADS

__all__ = ["MOCK_ANALYTICS", "MOCK_TEAM_MEMBERS", "MOCK_THREADS"]

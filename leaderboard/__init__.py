"""Ranked validator leaderboards served over HTTP."""

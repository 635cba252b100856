"""Routers for the creatorhub API."""

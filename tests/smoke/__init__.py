"""Smoke tests run against a live task frontend."""

"""Unit tests for the task frontend's pure helpers and client."""

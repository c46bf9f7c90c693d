"""Blueprints for the task frontend."""

"""
Test suite for the task frontend.

This package contains:
- unit/: display helpers, request normalisation, Task API client, config
- integration/: every browser route through the Flask test client
- contracts/: consumer checks against the Task API OpenAPI document
- smoke/: checks against a live server (see scripts/run_e2e.py)
"""

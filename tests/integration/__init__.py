"""
Route tests for the task frontend.

Each test drives a browser-facing route through the Flask test client with
the Task API replaced by a fake, and asserts on the rendered page or the
redirect target as well as on the upstream call that was made.
"""

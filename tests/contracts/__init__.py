"""Consumer contract tests against the Task API OpenAPI document."""

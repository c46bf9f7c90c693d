"""
Browser journeys for the task frontend.

Playwright drives a real browser against a running frontend and the Task
API behind it:
- Page Object Model (POM) pattern
- Locators based on data-testid attributes
- User flows that mirror how a caseworker manages a task
"""

"""
Browser tests for the TaskFlow frontend.

Playwright drives the real UI through the Page Object Model using
data-testid locators.
"""

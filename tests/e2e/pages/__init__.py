"""
Page objects for the TaskFlow browser tests.

Demonstrates:
- Page Object Model (POM) pattern
- Locator strategies using data-testid attributes
"""

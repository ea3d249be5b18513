"""
portfolio_advisor.reporting: terminal formatting of engine results.

Modules:
  formatters: ASCII table / block formatters for Typer CLI commands.
"""

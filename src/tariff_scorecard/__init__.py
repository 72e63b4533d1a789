"""Tariff Scorecard MCP Server.

Legislator tariff-messaging grades from published Google Sheets, normalized,
ranked and rendered as colour-coded scorecard tables.
"""

__version__ = "0.1.0"

from .page import render_page

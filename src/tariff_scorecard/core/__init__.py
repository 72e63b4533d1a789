"""Core business logic — sheet clients, row normalization, grading and models.

This module is framework-agnostic. It has no dependency on MCP, FastMCP,
or any server framework. The MCP server and the HTML renderer both import
from here.
"""

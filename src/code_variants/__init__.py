"""Gemini-backed Python variant generation and analysis."""

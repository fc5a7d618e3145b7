"""Operational scripts for URL shortener."""

"""Shared helpers: logging setup, HTTP access and atomic file writes."""

"""Shared helpers: logging, sanitizing and amount handling."""

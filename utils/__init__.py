"""Shared helpers: form validators, date handling and CLI output."""

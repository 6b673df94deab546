"""Falcon HTTP API."""

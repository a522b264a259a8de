"""Typed client and command-line interface for the Synology DSM Web API."""

__version__ = "0.1.0"

"""
Versify - Command Line Interface

Main CLI entry point for versification translation.
"""
from cli.main import app, main

__all__ = ["app", "main"]

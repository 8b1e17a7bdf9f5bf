"""Minimal command-line chat client for Ollama-style inference servers."""

__version__ = "0.1.0"

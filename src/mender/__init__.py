# src/mender/__init__.py
"""mender: run a program, ask an LLM for line-level fixes, apply them, repeat."""

__version__ = "0.1.0"

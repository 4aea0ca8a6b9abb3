"""Messagely: a small user-to-user messaging service."""

__version__ = "0.1.0"

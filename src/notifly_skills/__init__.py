"""Notifly agent skills installer."""

__version__ = "0.1.0"

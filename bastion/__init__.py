"""Bastion: a guild moderation and utility bot built on hikari."""

__version__ = "1.0.0"

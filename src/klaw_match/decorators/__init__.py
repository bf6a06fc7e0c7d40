"""Decorators turning exceptions into Result or Option values."""

from klaw_match.decorators.safe import safe, safe_async, safe_option, safe_option_async

__all__ = ['safe', 'safe_async', 'safe_option', 'safe_option_async']

"""Core domain package for groupwarden.

Core contains link detection, privilege checks, and command routing without
any Telegram or file-specific code, keeping the moderation logic portable.
"""

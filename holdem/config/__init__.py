"""Configuration package for the Hold'em engine.

Constants live in ``poker`` and ``server``; structured per-table settings
live in ``game_settings``.
"""

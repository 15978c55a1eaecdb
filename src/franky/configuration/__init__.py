"""
Configuration management for Franky.

This package handles application configuration:

- **app_configuration.py**: YAML-backed settings (AniList endpoint, cache TTL,
  formatting budget, recommendation heuristics, trivia timeout, scam keywords)
  exposed through the shared ``app_config`` instance.
"""

"""Adapters binding the domain ports to Notion, TMDB, Discord and SQLite."""

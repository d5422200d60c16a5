"""Shared configuration, SQLite helpers and the central event log."""

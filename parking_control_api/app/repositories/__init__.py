"""SQLite-backed repositories."""

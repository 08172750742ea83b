"""Database engine, sessions and initialization."""

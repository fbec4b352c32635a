"""Default views and assets written by ``tersite init``."""

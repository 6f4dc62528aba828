"""String records and their derived properties."""

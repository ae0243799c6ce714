"""SQLite persistence for the key-value session store."""

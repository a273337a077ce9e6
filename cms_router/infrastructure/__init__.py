"""Infrastructure adapters: structured logging and bearer-token verification."""

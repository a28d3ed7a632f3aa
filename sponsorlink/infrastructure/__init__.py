"""Infrastructure adapters: database, email, live connections."""

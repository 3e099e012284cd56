"""Simple task tracker: FastAPI RPC service, PostgreSQL store, and browser client."""

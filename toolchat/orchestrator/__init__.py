"""Server pool, tool registry and query orchestration."""

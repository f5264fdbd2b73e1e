"""HTTP API for the staffdir backend."""

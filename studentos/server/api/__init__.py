"""HTTP API of the StudentOS backend."""

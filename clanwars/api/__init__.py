"""HTTP clients for the clan wars service."""

"""HTTP API for Threadboard."""

"""Operational scripts for Threadboard."""

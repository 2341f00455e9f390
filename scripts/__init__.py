"""Demonstration drivers built on the ray tracer math kernel."""

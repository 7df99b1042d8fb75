"""Workforce capacity and reassignment allocation engine."""

"""Utility helpers for the compiler CLI."""

"""Utility helpers for evalo."""

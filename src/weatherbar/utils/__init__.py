"""Utility helpers for weatherbar."""

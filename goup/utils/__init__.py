"""Utility helpers for goup."""

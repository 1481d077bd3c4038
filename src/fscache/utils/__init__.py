"""Utility helpers for fscache."""

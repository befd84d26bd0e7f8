"""Utility helpers for svn-crawler."""

"""Routing — path segmentation, pattern matching, per-request dispatch.

Patterns are evaluated one registration call at a time against a
request snapshot taken when the Router is built.
"""

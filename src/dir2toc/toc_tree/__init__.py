"""Filtered directory tree construction.

This module provides the classes for building the tree of included files that a
table of contents is rendered from.
"""

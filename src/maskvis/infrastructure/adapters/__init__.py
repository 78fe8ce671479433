"""Adapters to external structure and scoring programs.

Import each adapter from its own module.
"""

"""Taskbox — a personal task list behind bearer-token auth.

Users keep a short list of text tasks. Every read and write is scoped
to the identity resolved from the request's bearer token.
"""

__version__ = "0.1.0"

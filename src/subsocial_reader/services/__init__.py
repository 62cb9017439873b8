# src/subsocial_reader/services/__init__.py
"""Finders, collaborators and the read API facade."""

"""Packaged JSON schemas for SymSize input files."""

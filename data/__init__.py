"""Progression datasets

This package provides the built-in progression examples and loads labeled tables (CSV/JSON/Parquet) into training examples.
"""

"""Training package for the progression unit.

This package holds the linear unit itself, its training configuration, and the
command-line entry point that trains the unit and serves predictions.
"""

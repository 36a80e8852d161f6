"""Scoring module for the visibility assessment.

Implements the visibility scoring pipeline:
  answers → option weights → form score → blend with audit score
  → final score → tier → recommendations
"""

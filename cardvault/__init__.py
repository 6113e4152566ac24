"""Graded trading card processing pipeline and hybrid card search."""

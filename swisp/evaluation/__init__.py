"""Evaluation and lambda application."""

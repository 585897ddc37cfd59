"""Plazoo command-line interface."""

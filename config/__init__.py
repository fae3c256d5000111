"""Configuration for the withholding tax engine."""

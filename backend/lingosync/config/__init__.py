"""
Configuration package: environment settings, tuning constants, language table.
"""

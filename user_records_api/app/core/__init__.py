"""
Core infrastructure: settings, logging and database wiring.
"""

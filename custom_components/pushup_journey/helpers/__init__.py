"""Helper modules for Push-up Journey integration.

Helpers here may use Home Assistant APIs (config paths, executor jobs) but
hold no state of their own.
"""

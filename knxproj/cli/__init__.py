# Path: knxproj/cli/__init__.py
"""
CLI Module

Command-line entry points.
"""

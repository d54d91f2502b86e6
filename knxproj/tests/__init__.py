# Path: knxproj/tests/__init__.py
"""knxproj test suite."""

# Path: knxproj/schema/__init__.py
"""
Schema Module

Schema dialect resolution by namespace URI.
"""

from knxproj.schema.resolver import SchemaVersion, SchemaResolver, NAMESPACE_BASE

__all__ = ['SchemaVersion', 'SchemaResolver', 'NAMESPACE_BASE']

# Path: knxproj/engine/__init__.py
"""
Engine Module

Extraction, classification and the export archive session.

Import from the submodules:
    knxproj.engine.extraction   ArchiveExtractor, password resolvers
    knxproj.engine.classifier   FileClassifier, TypedFileRef
    knxproj.engine.session      open_export_archive
"""

# Path: knxproj/constants.py
"""
knxproj Module Constants

Module-wide constants for archive extraction, classification and decoding.

No hardcoded paths - all paths come from .env via config_loader.
"""

# ============================================================================
# EXTRACTION DEFAULTS
# ============================================================================
DEFAULT_CHUNK_SIZE: int = 65536  # 64KB chunks for streaming entries to disk
MAX_RECURSION_DEPTH: int = 8  # Maximum nested container depth
MAX_ARCHIVE_SIZE: int = 2147483648  # 2GB uncompressed per container

# ============================================================================
# FILE EXTENSIONS
# ============================================================================
# Nested containers (expanded recursively)
CONTAINER_EXTENSIONS: frozenset = frozenset({
    '.zip',       # Inner project / manufacturer containers
    '.knxproj',   # Project export
    '.knxprod',   # Product database export
})

# Documents handed to the decoder
DOCUMENT_EXTENSIONS: frozenset = frozenset({
    '.xml',
})

# Everything else inside a container is skipped
PROCESSABLE_EXTENSIONS: frozenset = CONTAINER_EXTENSIONS | DOCUMENT_EXTENSIONS

# Suffix for entries still being written
PARTIAL_FILE_SUFFIX: str = '.part'

# ============================================================================
# IDENTIFIERS
# ============================================================================
IDENTIFIER_DELIMITER: str = '_'
TAG_DELIMITER: str = '-'
LINK_DELIMITER: str = ' '

# ============================================================================
# XML
# ============================================================================
FLAG_ENABLED: str = 'Enabled'

# ============================================================================
# IPO LOGGING PREFIXES
# ============================================================================
LOG_INPUT: str = '[INPUT]'
LOG_PROCESS: str = '[PROCESS]'
LOG_OUTPUT: str = '[OUTPUT]'

# ============================================================================
# LOGGING COMPONENTS
# ============================================================================
LOGGER_ROOT: str = 'knxproj'
LOGGER_CORE: str = 'knxproj.core'
LOGGER_ENGINE: str = 'knxproj.engine'
LOGGER_EXTRACTION: str = 'knxproj.extraction'
LOGGER_DECODING: str = 'knxproj.decoding'
LOGGER_CLI: str = 'knxproj.cli'

# ============================================================================
# LOG FORMAT
# ============================================================================
LOG_FORMAT: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT: str = '%Y-%m-%d %H:%M:%S'
LOG_ACTIVITY_FILENAME: str = 'knxproj_activity.log'
LOG_ERRORS_FILENAME: str = 'errors.log'

# ============================================================================
# DIRECTORY NAMES
# ============================================================================
SESSION_DIR_PREFIX: str = 'knxproj_'

# ============================================================================
# ENVIRONMENT VARIABLE NAMES
# ============================================================================
ENV_MAX_RECURSION_DEPTH: str = 'KNXPROJ_MAX_RECURSION_DEPTH'
ENV_MAX_ARCHIVE_SIZE: str = 'KNXPROJ_MAX_ARCHIVE_SIZE'
ENV_CHUNK_SIZE: str = 'KNXPROJ_CHUNK_SIZE'
ENV_TEMP_DIR: str = 'KNXPROJ_TEMP_DIR'
ENV_LOG_DIR: str = 'KNXPROJ_LOG_DIR'
ENV_LOG_LEVEL: str = 'KNXPROJ_LOG_LEVEL'
ENV_LOG_CONSOLE: str = 'KNXPROJ_LOG_CONSOLE'


__all__ = [
    # Extraction
    'DEFAULT_CHUNK_SIZE',
    'MAX_RECURSION_DEPTH',
    'MAX_ARCHIVE_SIZE',
    'CONTAINER_EXTENSIONS',
    'DOCUMENT_EXTENSIONS',
    'PROCESSABLE_EXTENSIONS',
    'PARTIAL_FILE_SUFFIX',

    # Identifiers
    'IDENTIFIER_DELIMITER',
    'TAG_DELIMITER',
    'LINK_DELIMITER',

    # XML
    'FLAG_ENABLED',

    # Logging
    'LOG_INPUT',
    'LOG_PROCESS',
    'LOG_OUTPUT',
    'LOGGER_ROOT',
    'LOGGER_CORE',
    'LOGGER_ENGINE',
    'LOGGER_EXTRACTION',
    'LOGGER_DECODING',
    'LOGGER_CLI',
    'LOG_FORMAT',
    'LOG_DATE_FORMAT',
    'LOG_ACTIVITY_FILENAME',
    'LOG_ERRORS_FILENAME',

    # Directories
    'SESSION_DIR_PREFIX',

    # Environment
    'ENV_MAX_RECURSION_DEPTH',
    'ENV_MAX_ARCHIVE_SIZE',
    'ENV_CHUNK_SIZE',
    'ENV_TEMP_DIR',
    'ENV_LOG_DIR',
    'ENV_LOG_LEVEL',
    'ENV_LOG_CONSOLE',
]

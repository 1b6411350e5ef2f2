"""
Utility modules for genutil_pkg.

Provides:
    - resolver: mapping logical filenames to physical files and access methods
    - file_handler: buffered streams over resolved files, line counting, writers
    - formats: compression, access-method and comment-style enums
    - settings: Base settings class with immutable update pattern

The public functions are re-exported from the top-level genutil_pkg package.
"""

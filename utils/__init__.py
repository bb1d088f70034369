"""
Utility modules.

This package contains shared utility functions and configurations:
- File discovery and backup utilities
- Logging configuration
- Shared constants and runtime tool configuration
"""

"""
Core subtitle modules.

This package contains the fundamental components of the toolkit:
- Subtitle track, cue and document types with the SRT codec
- mkvmerge track inspection
- Structural track matching
- Encoding detection and timing utilities
- The error taxonomy
"""

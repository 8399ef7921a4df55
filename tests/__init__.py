"""
Test suite for hxcrepair.

- Unit tests for the document helpers, layout extraction, offset state,
  sector reconciliation and track sequencing
- Integration tests running the complete repair from the command line
- Fixtures building HxC XML disk layout dumps
"""

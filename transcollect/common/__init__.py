# transcollect/common - shared helpers for core/ and tools/
#
# Configuration, atomic file writes and slug generation. Nothing here holds
# state between calls.

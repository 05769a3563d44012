"""
Scan pipeline: file walking, key extraction, registry, catalog format, merge.

Import submodules directly (e.g. ``transcollect.core.collector``); nothing is
re-exported here because ``transcollect.common.config`` imports
``transcollect.core.errors``.
"""

"""Translation key collector: scans source trees and maintains key catalogs."""

__version__ = "1.0.0"

"""
Exposes the version of geovincenty
"""

__version__ = 'v0.1.0'

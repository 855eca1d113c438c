"""
Version information for the key handler package.
"""

__version__ = "1.0.0"
__author__ = "Keydrop Team"
__license__ = "Proprietary"

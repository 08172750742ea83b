"""
Utility package.
"""

"""
HTTP layer for the Writing Assistant proxy.
"""

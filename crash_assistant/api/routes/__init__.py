"""
HTTP service routes.
"""

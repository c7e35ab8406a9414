"""
HTTP front end for a symbolication session.
"""

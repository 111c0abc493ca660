"""
Video to blog post converters.
"""

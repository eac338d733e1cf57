"""
Maydel catalog engine.
"""

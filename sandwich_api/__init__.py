"""
Sandwich builder REST backend
"""

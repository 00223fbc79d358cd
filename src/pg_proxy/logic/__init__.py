"""
Business Logic Layer Module.
"""

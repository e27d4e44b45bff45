"""
Core infrastructure: settings and database
"""

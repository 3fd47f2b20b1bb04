"""
Database maintenance scripts
"""

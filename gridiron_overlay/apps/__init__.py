"""
Application entry points
"""

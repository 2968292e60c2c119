"""
Consulting desk back-end: projects, time tracking, students and invoicing.
"""

__version__ = "1.0.0"

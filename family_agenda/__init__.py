"""
family-agenda - recurring family reminders resolved into calendar and agenda views.
"""

__version__ = "0.1.0"

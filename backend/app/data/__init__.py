"""
Static default datasets used as read fallbacks.
"""

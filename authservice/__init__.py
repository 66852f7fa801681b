"""
Auth Service - signup, login and signed cookie sessions.
"""

__version__ = "1.0.0"

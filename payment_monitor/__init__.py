"""Stripe payment failure monitor"""

__version__ = "1.0.0"

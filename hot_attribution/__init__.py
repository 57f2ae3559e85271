"""
HoT attribution engine for Restoration Druid combat logs.

Reconstructs which mechanic (a hardcast or one of several procs) produced every
heal-over-time application, and keeps running healing, mastery and proc totals
for each of those mechanics.
"""

__version__ = "0.1.0"
__author__ = "HoT Attribution Team"

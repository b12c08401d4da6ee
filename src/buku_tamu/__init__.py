"""
Buku Tamu Bapperida - guest registration, dashboard statistics and
period-based Excel reports for the front-desk kiosk.
"""

__version__ = "1.0.0"

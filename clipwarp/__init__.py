"""
clipwarp — rofi clipboard manager and Cloudflare WARP toggle.
"""

__version__ = "0.3.0"

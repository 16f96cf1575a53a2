"""
clipwarp.vpn — Cloudflare WARP toggle.
"""

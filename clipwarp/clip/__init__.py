"""
clipwarp.clip — rofi clipboard manager on top of cliphist.

Pins live in a directory of content-addressed files, image previews in a
thumbnail cache, and everything is presented through rofi's script-mode
line protocol.
"""

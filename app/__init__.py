"""
Qt front-end: configuration, capture thread, tick loop and game window.
"""

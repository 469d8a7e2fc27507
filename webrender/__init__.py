"""
WebRender: headless-browser rendering of URLs and HTML over HTTP.
"""

__version__ = "1.0.0"

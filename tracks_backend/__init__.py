"""
Tracks server: browse and stream a local music directory over HTTP.
"""

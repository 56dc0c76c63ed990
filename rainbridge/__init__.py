"""
Rainbridge - migrate Raindrop.io bookmarks and collections to Karakeep.
"""

__version__ = "1.0.0"

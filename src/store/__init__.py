"""Block storage layer.

This module reads the local flatfs block store and converts its
storage keys back into content identifiers for the SDK.
"""

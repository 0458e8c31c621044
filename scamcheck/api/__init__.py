"""
HTTP API for ScamCheck.
"""

"""
HTTP API for notegraph
"""

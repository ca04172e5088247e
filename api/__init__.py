"""
HTTP API for the Banking SEO Studio dashboard.
"""

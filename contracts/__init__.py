"""
Fan Token contracts, their reusable stdlib and the deploy/client tooling.
"""

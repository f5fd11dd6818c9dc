"""
Business domains of the Cart Uplift worker
"""

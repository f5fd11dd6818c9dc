"""
Cart Uplift affinity and attribution worker
"""

"""
Product affinity domain

Co-purchase matrix building, similarity scoring and time-decayed
association analysis.
"""

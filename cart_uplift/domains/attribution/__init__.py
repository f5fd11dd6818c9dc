"""
Purchase attribution domain

Decides which purchased products were driven by recommendations or
bundles and records the revenue they produced.
"""

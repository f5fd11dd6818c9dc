"""
Storefront tracking domain
"""

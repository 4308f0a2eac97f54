"""
Core infrastructure: configuration, logging, storage and retry policy.
"""

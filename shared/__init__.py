"""
Shared services for the channel catalog pipelines
"""

"""
Core services: records, codecs, validation, conversion and configuration
"""

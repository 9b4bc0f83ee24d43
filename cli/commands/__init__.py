"""
TapHeir CLI command groups.
"""

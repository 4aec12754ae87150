"""Sheet Flattener - Shared utilities"""

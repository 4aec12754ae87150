"""Sheet Flattener - Core module"""

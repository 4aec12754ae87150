"""Sheet Flattener - CLI commands"""

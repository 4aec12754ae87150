"""Sheet Flattener - Engine module (codec, flattening, export)"""

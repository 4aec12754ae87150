"""Sheet Flattener - Streamlit UI"""

"""Streamlit session-state helpers."""

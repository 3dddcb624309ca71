"""Streamlit-facing helpers. Nothing under :mod:`ethernote.controllers` imports this package."""

"""Ethernote: a Supabase-backed note-taking client."""

__version__ = "0.1.0"

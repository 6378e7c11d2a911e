"""Embedding and Supabase store clients."""

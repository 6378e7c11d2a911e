"""Shared test configuration."""

import os

# Settings are read at import time; provide credentials before any module loads
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test_service_role_key")
os.environ.setdefault("OPENAI_API_KEY", "test_openai_key")
os.environ.setdefault("CO_API_KEY", "test_cohere_key")

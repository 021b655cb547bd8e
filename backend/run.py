#!/usr/bin/env python3
# backend/run.py
"""
Development server runner for the availability API.

Uses whatever DATABASE_URL / ENVIRONMENT the environment (or backend/.env)
provides; defaults to the local SQLite file.
"""
import os
from pathlib import Path
import sys

# Add backend to path
backend_dir = Path(__file__).parent
sys.path.insert(0, str(backend_dir))
os.chdir(backend_dir)

os.environ.setdefault("ENVIRONMENT", "local")

import uvicorn

if __name__ == "__main__":
    port = int(os.getenv("PORT", "8000"))
    print(f"🌐 Access at: http://localhost:{port}")
    print(f"📚 API Docs: http://localhost:{port}/docs")

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=port,
        reload=True,
        reload_delay=0.5,  # Small delay to batch rapid file changes
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
        timeout_graceful_shutdown=5,
    )

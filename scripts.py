#!/usr/bin/env python3
"""
Scripts for running the scheduler API.
"""

import uvicorn


def run_backend():
    """Run the Aviation Scheduler API server."""
    print("🚀 Starting Aviation Scheduler API...")
    print("📍 API: http://localhost:8000")
    print("-" * 40)

    uvicorn.run(
        "aviation.api:app", host="0.0.0.0", port=8000, reload=True, log_level="info"
    )

#!/usr/bin/env python3
"""
Development server starter for the Pantry Pilot API.
"""

import os
import uvicorn

if __name__ == "__main__":
    # Run from the project root so `app.main` and .env resolve
    script_dir = os.path.dirname(os.path.abspath(__file__))
    os.chdir(script_dir)

    port = int(os.getenv("PORT", "8000"))
    print(f"Starting Pantry Pilot API from: {script_dir}")
    print(f"API docs will be available at: http://localhost:{port}/docs")

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=port,
        reload=True,
        reload_dirs=["./app"],
    )

#!/usr/bin/env python3
"""
Run script for the credential service.
This script launches the FastAPI server with the auth router mounted.
"""
import os
import uvicorn
import sys
import traceback

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 8000))

if __name__ == "__main__":
    try:
        # Print information about the server
        print("Starting credential service...")
        print(f"Access the API at http://{HOST}:{PORT}")
        print(f"API documentation at http://{HOST}:{PORT}/docs")

        # Run the server
        uvicorn.run(
            "credservice.main:app",
            host=HOST,
            port=PORT,
            log_level=os.getenv("LOG_LEVEL", "info").lower()
        )
    except Exception as e:
        print(f"Error starting server: {e}")
        traceback.print_exc()
        sys.exit(1)

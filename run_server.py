import os

import uvicorn

from backend.config import configure_logging

if __name__ == "__main__":
    configure_logging()
    port = int(os.environ.get("PORT", "8000"))

    print("Starting Gantt Generator API...")
    print(f"Docs available at: http://localhost:{port}/docs")

    uvicorn.run(
        "backend.api.server:app",
        host="0.0.0.0",
        port=port,
        reload=os.environ.get("GANTT_RELOAD", "").lower() in ("1", "true"),
    )

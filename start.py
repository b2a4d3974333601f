"""Container entrypoint: reads PORT and starts uvicorn."""
import os
import sys

port = int(os.environ.get("PORT", 8000))
print(f"Starting Show More on port {port}", flush=True)
print(f"Python: {sys.version}", flush=True)

import uvicorn
uvicorn.run(
    "showmore.web.app:create_app",
    host="0.0.0.0",
    port=port,
    factory=True,
    log_level=os.environ.get("LOG_LEVEL", "info"),
)

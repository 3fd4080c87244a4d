import os
import sys
import uvicorn
from talkrag.core.config import settings

# Fix Windows console encoding, stdout only (stderr must stay
# untouched because tqdm calls sys.stderr.flush() and a reconfigured
# stderr raises OSError [Errno 22] on Windows).
if os.name == "nt":
    os.environ["PYTHONIOENCODING"] = "utf-8"
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8", errors="replace")

if __name__ == "__main__":
    uvicorn.run(
        "talkrag.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "development",  # Only reload in development
        log_level="info" if settings.environment == "development" else "warning",
    )

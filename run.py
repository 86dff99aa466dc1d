"""
Запуск сервисов stream-relay.

    python run.py              # publisher + subscriber
    python run.py publisher    # только HTTP publisher
    python run.py subscriber   # только RabbitMQ subscriber
"""

import os
import subprocess
import sys
from threading import Thread

from dotenv import load_dotenv

load_dotenv(".env")


def run_publisher():
    """Run FastAPI publisher (port from APP_PORT, default 8080)."""
    subprocess.run([
        sys.executable, "-m", "uvicorn",
        "relay.main:app",
        "--host", os.getenv("APP_HOST", "0.0.0.0"),
        "--port", os.getenv("APP_PORT", "8080"),
    ])


def run_subscriber():
    """Run FastStream subscriber worker."""
    subprocess.run([sys.executable, "-m", "relay.messaging.worker"])


if __name__ == "__main__":
    target = sys.argv[1] if len(sys.argv) > 1 else "all"

    if target == "publisher":
        run_publisher()
    elif target == "subscriber":
        run_subscriber()
    elif target == "all":
        subscriber_thread = Thread(target=run_subscriber, daemon=True)
        subscriber_thread.start()
        run_publisher()
    else:
        print(f"Unknown service: {target} (expected publisher|subscriber|all)")
        sys.exit(2)

"""
Run the live-server suites against a freshly started task frontend.

Starts ``serve.py`` in a subprocess, waits until its readiness probe
answers, runs the ``smoke`` checks and the Playwright ``e2e`` journeys with
``TEST_BASE_URL`` pointing at it, then stops the server. The journeys skip
themselves when the Task API behind the server is unreachable. The exit
code is pytest's.

Usage::

    python scripts/run_e2e.py
    python scripts/run_e2e.py --task-api-url http://localhost:4000 -- --headed
    python scripts/run_e2e.py --port 3200 --config production -- -x -q
"""

from __future__ import annotations

import argparse
import os
import signal
import subprocess
import sys
import time
from pathlib import Path

import requests

REPO_ROOT = Path(__file__).resolve().parents[1]
MAX_RETRIES = 30
RETRY_INTERVAL = 1.0


def log(message: str) -> None:
    print(f"[e2e-runner] {message}", flush=True)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for the e2e runner."""
    parser = argparse.ArgumentParser(
        description="Start the task frontend, run the smoke and e2e suites against it, then stop it."
    )
    parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "3100")))
    parser.add_argument(
        "--config",
        default="development",
        help="Configuration name passed to the server as FLASK_ENV (default: development).",
    )
    parser.add_argument(
        "--task-api-url",
        default=os.environ.get("TASK_API_BASE_URL"),
        help="Task API the server should call (default: the server's own configuration).",
    )
    parser.add_argument("--retries", type=int, default=MAX_RETRIES)
    parser.add_argument("--interval", type=float, default=RETRY_INTERVAL)
    parser.add_argument(
        "pytest_args",
        nargs=argparse.REMAINDER,
        help="Extra arguments forwarded to pytest (after --).",
    )
    return parser.parse_args(argv)


def wait_for_server(url: str, retries: int, interval: float) -> None:
    """
    Poll the readiness probe until it answers 200.

    Raises:
        RuntimeError: If the server is not ready after *retries* attempts.
    """
    for attempt in range(1, retries + 1):
        try:
            response = requests.get(f"{url}/health/readiness", timeout=1)
            if response.status_code == 200:
                log(f"Server is ready (status: {response.status_code})")
                return
        except requests.RequestException:
            pass
        log(f"Waiting for server ({attempt}/{retries})")
        time.sleep(interval)
    raise RuntimeError(f"Server not ready after {retries} attempts")


def start_server(port: int, config_name: str, task_api_url: str | None = None) -> subprocess.Popen:
    log("Starting server...")
    env = {**os.environ, "PORT": str(port), "FLASK_ENV": config_name}
    if task_api_url:
        env["TASK_API_BASE_URL"] = task_api_url
    return subprocess.Popen([sys.executable, str(REPO_ROOT / "serve.py")], cwd=REPO_ROOT, env=env)


def stop_server(process: subprocess.Popen, timeout: float = 10) -> None:
    """Ask the server to shut down gracefully, killing it if it overstays."""
    if process.poll() is not None:
        return
    log("Stopping server...")
    process.send_signal(signal.SIGTERM)
    try:
        process.wait(timeout=timeout)
    except subprocess.TimeoutExpired:
        log("Server did not stop in time, killing it")
        process.kill()
        process.wait()


def run_tests(base_url: str, pytest_args: list[str]) -> int:
    log("Running e2e tests...")
    forwarded = [arg for arg in pytest_args if arg != "--"]
    env = {**os.environ, "TEST_BASE_URL": base_url}
    command = [sys.executable, "-m", "pytest", "-m", "smoke or e2e", "tests/smoke", "tests/e2e", *forwarded]
    return subprocess.run(command, cwd=REPO_ROOT, env=env, check=False).returncode


def main(argv: list[str] | None = None) -> int:
    """Entry point: start the server, run the suite, always clean up."""
    args = parse_args(argv)
    base_url = f"http://localhost:{args.port}"
    server = start_server(args.port, args.config, args.task_api_url)
    try:
        wait_for_server(base_url, args.retries, args.interval)
        exit_code = run_tests(base_url, args.pytest_args)
    except RuntimeError as exc:
        log(str(exc))
        exit_code = 1
    finally:
        stop_server(server)
    log(f"Tests finished with exit code {exit_code}")
    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())

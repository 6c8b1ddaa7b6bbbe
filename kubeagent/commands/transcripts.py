"""Canned terminal output for the simulated shell, logs and packet capture."""

from __future__ import annotations

from datetime import datetime

SHELL_SESSION: str = """\
Defaulting container name to main.
Successfully connected to pod/{pod}
/ # whoami
root
/ # ls -F /app
bin/  config.json  main.js  node_modules/  package.json  public/
/ # netstat -tuln
Active Internet connections (only servers)
Proto Recv-Q Send-Q Local Address           Foreign Address         State
tcp        0      0 0.0.0.0:8080            0.0.0.0:*               LISTEN
/ # ps aux
PID   USER     TIME  COMMAND
    1 root      0:05 node main.js
   42 root      0:00 /bin/sh
   43 root      0:00 ps aux
/ # exit
command terminated with exit code 0\
"""

LOG_LINES: tuple[str, ...] = (
    "INFO: Starting service...",
    "INFO: Listening on port 8080",
    "INFO: Health check passed",
)

TCPDUMP_CAPTURE: str = """\
tcpdump: listening on eth0, link-type EN10MB (Ethernet)
10:00:01.123 IP 10.244.0.10.45678 > 10.244.0.15.80: Flags [S]
10:00:01.124 IP 10.244.0.15.80 > 10.244.0.10.45678: Flags [S.]\
"""

FALLBACK: str = "Command executed: {command}\nOutput: Success (Simulated)"

NOT_FOUND: str = 'Error from server (NotFound): pods "{pod}" not found'

NO_RESOURCES: str = "No resources found in {namespace} namespace."


def iso_millis(ts: datetime) -> str:
    """Format *ts* as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    return ts.strftime("%Y-%m-%dT%H:%M:%S.") + f"{ts.microsecond // 1000:03d}Z"


def log_transcript(now: datetime) -> str:
    stamp = iso_millis(now)
    return "\n".join(f"[{stamp}] {line}" for line in LOG_LINES)

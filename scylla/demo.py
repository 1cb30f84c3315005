"""Sample agents for demo mode (no database needed)."""

from datetime import datetime, timedelta

from .models import AgentRecord


def generate_demo_agents() -> list[AgentRecord]:
    now = datetime.now()

    def seen(minutes: int) -> str:
        return (now - timedelta(minutes=minutes)).strftime("%Y-%m-%d %H:%M:%S")

    return [
        AgentRecord(id="a1b2c3d4", hostname="web-01", ip="10.0.0.12", status="online",
                    os="Ubuntu 22.04", last_seen=seen(1), location="Paris, FR",
                    note="Front proxy"),
        AgentRecord(id="e5f6a7b8", hostname="db-02", ip="10.0.0.31", status="online",
                    os="Debian 12", last_seen=seen(3), location="Frankfurt, DE"),
        AgentRecord(id="c9d0e1f2", hostname="ws-finance-7", ip="192.168.4.77", status="idle",
                    os="Windows 11", last_seen=seen(42)),
        AgentRecord(id="a3b4c5d6", hostname="build-mac", ip="172.16.2.5", status="offline",
                    os="macOS 14", last_seen=seen(60 * 26), location="Lyon, FR",
                    note="Rotated out of CI pool"),
        AgentRecord(id="e7f8a9b0", hostname="edge-gw", ip="203.0.113.9", status="unknown"),
    ]

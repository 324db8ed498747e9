from datetime import datetime, UTC


def utcnow() -> datetime:
    """Current time as naive UTC, the representation used for every stored timestamp."""
    return datetime.now(UTC).replace(tzinfo=None)


def print_banner(service_name: str, version: str = "1.0.0"):
    """
    Print the startup banner.

    Args:
        service_name: Name of the process starting up (e.g., "Response-Core")
        version: Version number of the service (default: "1.0.0")
    """
    print("=" * 80)
    print("  MDRRMO Incident Response Coordination Engine")
    print("=" * 80)
    print(f"  Service:        {service_name}")
    print(f"  Version:        {version}")
    print(f"  Started:        {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print("-" * 80)
    print("  Components:     Classifier | Dispatch Router | Lifecycle Scheduler | Notifier")
    print("=" * 80)
    print()

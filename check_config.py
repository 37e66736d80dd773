#!/usr/bin/env python3
"""
Diagnostic script to verify the IEV source parser environment configuration.
Run this to check if your environment variables are properly set.

Usage:
    python check_config.py
"""

import os
import sys
from typing import List, Tuple

from dotenv import load_dotenv


def check_env_var(name: str, required: bool = True) -> Tuple[bool, str]:
    """Check if environment variable is set and return status."""
    value = os.getenv(name)
    if value:
        # Mask sensitive values
        if "KEY" in name or "SECRET" in name or "TOKEN" in name:
            masked = value[:8] + "..." if len(value) > 8 else "***"
            return True, f"✓ {name}: {masked}"
        return True, f"✓ {name}: {value}"
    status = "✗" if required else "○"
    return False, f"{status} {name}: NOT SET"


def collect_issues() -> Tuple[List[str], List[str]]:
    """Return (report lines, issues) for the current environment."""
    lines: List[str] = []
    issues: List[str] = []

    for var, required in (
        ("REFERENCE_REGISTRY_URL", False),
        ("REFERENCE_REGISTRY_TOKEN", False),
        ("DATABASE_URL", False),
        ("LOG_LEVEL", False),
    ):
        _, msg = check_env_var(var, required=required)
        lines.append(msg)

    registry_url = os.getenv("REFERENCE_REGISTRY_URL")
    if registry_url and not registry_url.startswith(("http://", "https://")):
        issues.append("REFERENCE_REGISTRY_URL must start with http:// or https://")

    level = os.getenv("LOG_LEVEL")
    if level and level.upper() not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        issues.append(f"LOG_LEVEL has unknown value: {level}")

    return lines, issues


def main() -> None:
    load_dotenv()

    print("=" * 60)
    print("IEV Source Parser Configuration Check")
    print("=" * 60)
    print()

    lines, issues = collect_issues()
    for line in lines:
        print(line)
    print()

    if not os.getenv("REFERENCE_REGISTRY_URL"):
        print("○ References will be parsed but not resolved to links.")

    if issues:
        print("Issues found:")
        for issue in issues:
            print(f"  ✗ {issue}")
        sys.exit(1)

    print("✓ Configuration looks good.")


if __name__ == "__main__":
    main()
